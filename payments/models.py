from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils.crypto import get_random_string

REFERENCE_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-"


def generate_reference() -> str:
    while True:
        ref = f"PAY-{get_random_string(8, allowed_chars=REFERENCE_CHARS)}"
        if not Payment.objects.filter(reference=ref).exists():
            return ref


class Payment(models.Model):
    """
    A user-submitted payment. Without an order it is a balance top-up;
    ops verifies the transfer externally and marks it completed.
    """
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        REJECTED = "rejected", "Rejected"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="payments")
    order = models.ForeignKey("store.Order", on_delete=models.PROTECT, null=True, blank=True, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    reference = models.CharField(max_length=32, unique=True, default=generate_reference)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    # set once, when a top-up is credited to the balance
    credited_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    @property
    def is_top_up(self) -> bool:
        return self.order_id is None

    def __str__(self) -> str:
        return f"Payment #{self.id} · {self.user} · {self.amount} · {self.status}"
