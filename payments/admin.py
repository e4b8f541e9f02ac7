from django.contrib import admin, messages

from .models import Payment
from .services import set_payment_status


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "reference", "user", "order", "amount", "status", "credited_at", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("reference", "user__username", "user__email")
    # status only moves through the actions, so a completed top-up is always credited
    readonly_fields = ("user", "order", "amount", "reference", "status", "credited_at", "created_at", "updated_at")
    actions = ["mark_completed", "mark_rejected"]

    def _transition(self, request, queryset, status):
        done = 0
        for payment in queryset:
            if payment.status == Payment.Status.COMPLETED:
                continue
            set_payment_status(request.user, payment.id, status)
            done += 1
        self.message_user(request, f"{done} payment(s) marked {status}.", messages.SUCCESS)

    @admin.action(description="Mark selected payments completed")
    def mark_completed(self, request, queryset):
        self._transition(request, queryset, Payment.Status.COMPLETED)

    @admin.action(description="Mark selected payments rejected")
    def mark_rejected(self, request, queryset):
        self._transition(request, queryset, Payment.Status.REJECTED)
