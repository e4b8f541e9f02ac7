# store/serializers_admin.py
"""
One update serializer per entity. Each declares exactly the fields the back
office may change; anything else in the request body is dropped by DRF.
"""
from rest_framework import serializers

from .models import KYCSubmission, Order, PhoneNumber
from .models_catalog import Product


class AdminUserUpdateSerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False)
    isAdmin = serializers.BooleanField(source="is_admin", required=False)
    isBanned = serializers.BooleanField(source="is_banned", required=False)
    referralCount = serializers.IntegerField(source="referral_count", min_value=0, required=False)


class AdminPhoneNumberUpdateSerializer(serializers.ModelSerializer):
    isAvailable = serializers.BooleanField(source="is_available", required=False)

    class Meta:
        model = PhoneNumber
        fields = ("price", "isAvailable", "country")

    def validate_price(self, v):
        if v < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return v


class AdminOrderUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices, required=False)
    code = serializers.CharField(max_length=64, allow_blank=True, required=False)


class AdminKYCUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[KYCSubmission.Status.APPROVED, KYCSubmission.Status.REJECTED]
    )
    adminNote = serializers.CharField(source="admin_note", allow_blank=True, required=False)


class AdminProductUpdateSerializer(serializers.ModelSerializer):
    isAdminApproved = serializers.BooleanField(source="is_admin_approved", required=False)

    class Meta:
        model = Product
        fields = ("isAdminApproved", "status", "price", "name", "description")


class BroadcastSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=120)
    message = serializers.CharField(max_length=2000)
