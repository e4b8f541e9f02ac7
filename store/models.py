from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.crypto import get_random_string

from .models_catalog import *
from .models_kyc import *

REFERRAL_CODE_CHARS = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_referral_code():
    while True:
        code = get_random_string(8, allowed_chars=REFERRAL_CODE_CHARS)
        if not UserAccount.objects.filter(referral_code=code).exists():
            return code


class UserAccount(models.Model):
    class KycStatus(models.TextChoices):
        NONE = "none", "None"
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="account")
    full_name = models.CharField(max_length=150, blank=True, default="")
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))
    referral_code = models.CharField(max_length=16, unique=True)
    referred_by = models.CharField(max_length=32, blank=True, default="", db_index=True)
    referral_count = models.PositiveIntegerField(default=0)
    kyc_status = models.CharField(max_length=16, choices=KycStatus.choices, default=KycStatus.NONE)
    is_banned = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=models.Q(balance__gte=0), name="useraccount_balance_non_negative"),
        ]

    def save(self, *args, **kwargs):
        if not self.referral_code:
            self.referral_code = generate_referral_code()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"User {self.user.username} Account: Balance={self.balance}, Referrals={self.referral_count}"


class Setting(models.Model):
    """
    Process-wide key/value configuration edited from the back office.
    Values are strings; see store.config for the typed view.
    """
    key = models.CharField(max_length=64, unique=True)
    value = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"{self.key}={self.value}"


class PhoneNumber(models.Model):
    number = models.CharField(max_length=32, db_index=True)
    country = models.CharField(max_length=64)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["country", "number"]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="phonenumber_price_non_negative"),
        ]

    def __str__(self):
        return f"{self.number} ({self.country})"


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        REJECTED = "rejected", "Rejected"
        FAILED = "failed", "Failed"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")
    phone_number = models.ForeignKey(PhoneNumber, on_delete=models.SET_NULL, null=True, related_name="orders")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    is_referral_reward = models.BooleanField(default=False)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    code = models.CharField(max_length=64, blank=True, default="")  # activation code handed to the buyer
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Order #{self.id} {self.user} {self.total_amount} {self.status}"


class Activity(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="activities")
    action = models.CharField(max_length=255)
    status = models.CharField(max_length=32)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "activities"

    def __str__(self):
        return f"{self.user_id}: {self.action} [{self.status}]"


class AiChat(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="chats")
    message = models.TextField()
    response = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
