# store/admin.py
from django.contrib import admin, messages

from .models import Activity, AiChat, KYCSubmission, Order, PhoneNumber, Setting, UserAccount
from .models_catalog import Country, Product, Service
from .services.kyc import review_kyc
from .services.orders import update_order


@admin.register(UserAccount)
class UserAccountAdmin(admin.ModelAdmin):
    list_display = ("user", "balance", "referral_code", "referral_count", "kyc_status", "is_banned", "created_at")
    list_filter = ("kyc_status", "is_banned")
    search_fields = ("user__username", "user__email", "referral_code", "referred_by")
    readonly_fields = ("referral_code", "kyc_status", "created_at")


@admin.register(PhoneNumber)
class PhoneNumberAdmin(admin.ModelAdmin):
    list_display = ("id", "number", "country", "price", "is_available", "created_at")
    list_filter = ("country", "is_available")
    search_fields = ("number",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "phone_number", "total_amount", "is_referral_reward", "status", "created_at")
    list_filter = ("status", "is_referral_reward")
    search_fields = ("user__username", "phone_number__number", "code")
    ordering = ("-created_at",)
    readonly_fields = ("user", "phone_number", "total_amount", "is_referral_reward", "status", "created_at", "updated_at")
    actions = ["mark_completed", "mark_rejected"]

    def _transition(self, request, queryset, status):
        ids = list(queryset.values_list("id", flat=True))
        for order_id in ids:
            update_order(request.user, order_id, {"status": status})
        self.message_user(request, f"{len(ids)} order(s) marked {status}.", messages.SUCCESS)

    @admin.action(description="Mark selected orders completed")
    def mark_completed(self, request, queryset):
        self._transition(request, queryset, Order.Status.COMPLETED)

    @admin.action(description="Mark selected orders rejected")
    def mark_rejected(self, request, queryset):
        self._transition(request, queryset, Order.Status.REJECTED)


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "action", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("action", "user__username")
    ordering = ("-created_at",)


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "updated_at")
    search_fields = ("key",)


@admin.register(KYCSubmission)
class KYCSubmissionAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "id_type", "id_number_last4", "status", "submitted_at", "reviewed_at")
    list_filter = ("status", "id_type")
    search_fields = ("user__username", "user__email", "id_number_last4")
    readonly_fields = ("user", "id_number_hash", "status", "submitted_at", "reviewed_at")
    actions = ["approve_selected", "reject_selected"]

    def _review(self, request, queryset, status):
        ids = list(queryset.values_list("id", flat=True))
        for kyc_id in ids:
            review_kyc(request.user, kyc_id, status)
        self.message_user(request, f"{status.capitalize()} {len(ids)} KYC(s).", messages.SUCCESS)

    @admin.action(description="Approve selected KYC")
    def approve_selected(self, request, queryset):
        self._review(request, queryset, KYCSubmission.Status.APPROVED)

    @admin.action(description="Reject selected KYC")
    def reject_selected(self, request, queryset):
        self._review(request, queryset, KYCSubmission.Status.REJECTED)


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_active", "created_at")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "flag", "is_active")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "user", "price", "status", "is_admin_approved", "created_at")
    list_filter = ("status", "is_admin_approved", "category")
    search_fields = ("name", "user__username")


admin.site.register(AiChat)
