# store/services/kyc.py
import hashlib
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from store.activity import APPROVED, PENDING, REJECTED, log_activity
from store.exceptions import Conflict
from store.models import KYCSubmission, UserAccount

log = logging.getLogger(__name__)

REVIEW_OUTCOMES = (KYCSubmission.Status.APPROVED, KYCSubmission.Status.REJECTED)


def hash_id_number(id_number: str) -> str:
    return hashlib.sha256(id_number.encode()).hexdigest()


@transaction.atomic
def submit_kyc(user, full_name, id_type, id_number, doc_front, doc_back, selfie=None) -> KYCSubmission:
    """One submission per user; a second attempt reports the current status."""
    account = UserAccount.objects.select_for_update().filter(user_id=user.id).first()
    if account is None:
        raise NotFound("User not found")

    existing = KYCSubmission.objects.filter(user_id=user.id).first()
    if existing is not None:
        raise Conflict("KYC already submitted", status=existing.status)

    kyc = KYCSubmission.objects.create(
        user_id=user.id,
        full_name=full_name,
        id_type=id_type,
        id_number_last4=id_number[-4:],
        id_number_hash=hash_id_number(id_number),
        doc_front=doc_front,
        doc_back=doc_back,
        selfie=selfie or "",
    )
    account.kyc_status = UserAccount.KycStatus.PENDING
    account.save(update_fields=["kyc_status"])

    log_activity(user.id, "Submitted KYC documents", PENDING)
    log.info("KYC %s submitted by user %s", kyc.id, user.id)
    return kyc


@transaction.atomic
def review_kyc(admin, kyc_id, status, admin_note=None) -> KYCSubmission:
    """
    Approve or reject a submission. The outcome is mirrored onto the
    user's account so referral rewards and uploads unlock immediately.
    """
    if status not in REVIEW_OUTCOMES:
        raise ValidationError({"status": ["Must be approved or rejected."]})

    kyc = KYCSubmission.objects.select_for_update().filter(pk=kyc_id).first()
    if kyc is None:
        raise NotFound("KYC record not found")

    kyc.status = status
    kyc.reviewed_at = timezone.now()
    update_fields = ["status", "reviewed_at"]
    if admin_note is not None:
        kyc.admin_note = admin_note
        update_fields.append("admin_note")
    kyc.save(update_fields=update_fields)

    UserAccount.objects.filter(user_id=kyc.user_id).update(kyc_status=status)

    log_activity(admin.id, f"Updated KYC {kyc.id} status to {status}")
    log_activity(kyc.user_id, "KYC verification", APPROVED if status == KYCSubmission.Status.APPROVED else REJECTED)
    log.info("KYC %s %s by admin %s", kyc.id, status, admin.id)
    return kyc
