# store/models_kyc.py
from django.conf import settings
from django.db import models

__all__ = ["KYCSubmission"]


class KYCSubmission(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    class IdType(models.TextChoices):
        NATIONAL_ID = "national_id", "National ID"
        PASSPORT = "passport", "International passport"
        DRIVERS_LICENSE = "drivers_license", "Driver's license"
        VOTERS_CARD = "voters_card", "Voter's card"

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="kyc")
    full_name = models.CharField(max_length=150)
    id_type = models.CharField(max_length=32, choices=IdType.choices)
    id_number_last4 = models.CharField(max_length=4)          # store only last 4 (privacy)
    id_number_hash = models.CharField(max_length=128)         # hash(full number) for de-dup checks
    doc_front = models.ImageField(upload_to="kyc/front/")
    doc_back = models.ImageField(upload_to="kyc/back/")
    selfie = models.ImageField(upload_to="kyc/selfie/", blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    admin_note = models.TextField(blank=True, default="")
    submitted_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-submitted_at", "-id"]

    def __str__(self):
        return f"KYC {self.user_id} [{self.status}]"
