# store/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Activity, AiChat, Order, PhoneNumber, UserAccount

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Account view of a user. The password hash is never part of it."""
    fullName = serializers.CharField(source="account.full_name", read_only=True)
    balance = serializers.DecimalField(source="account.balance", max_digits=14, decimal_places=2, read_only=True)
    referralCode = serializers.CharField(source="account.referral_code", read_only=True)
    referralCount = serializers.IntegerField(source="account.referral_count", read_only=True)
    referredBy = serializers.CharField(source="account.referred_by", read_only=True)
    kycStatus = serializers.CharField(source="account.kyc_status", read_only=True)
    isAdmin = serializers.BooleanField(source="is_staff", read_only=True)
    isBanned = serializers.BooleanField(source="account.is_banned", read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = (
            "id", "username", "email", "fullName",
            "balance", "referralCode", "referralCount", "referredBy",
            "kycStatus", "isAdmin", "isBanned", "createdAt",
        )
        read_only_fields = fields


class ReferralSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="user.id", read_only=True)
    username = serializers.CharField(source="user.username", read_only=True)
    fullName = serializers.CharField(source="full_name", read_only=True)
    kycStatus = serializers.CharField(source="kyc_status", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = UserAccount
        fields = ("id", "username", "fullName", "kycStatus", "createdAt")


class PhoneNumberSerializer(serializers.ModelSerializer):
    isAvailable = serializers.BooleanField(source="is_available", default=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = PhoneNumber
        fields = ("id", "number", "country", "price", "isAvailable", "createdAt")

    def validate_price(self, v):
        if v < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return v


class OrderSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    phoneNumberId = serializers.IntegerField(source="phone_number_id", read_only=True)
    phoneNumber = PhoneNumberSerializer(source="phone_number", read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=12, decimal_places=2, read_only=True)
    isReferralReward = serializers.BooleanField(source="is_referral_reward", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = (
            "id", "userId", "phoneNumberId", "phoneNumber", "totalAmount",
            "isReferralReward", "status", "code", "createdAt", "updatedAt",
        )
        read_only_fields = fields


class OrderCreateSerializer(serializers.Serializer):
    phoneNumberId = serializers.IntegerField(min_value=1)
    isReferralReward = serializers.BooleanField(default=False)


class ActivitySerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Activity
        fields = ("id", "userId", "action", "status", "createdAt")


class AiChatSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = AiChat
        fields = ("id", "userId", "message", "response", "createdAt")
        read_only_fields = ("response",)


class ChatMessageSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=2000, trim_whitespace=True)
