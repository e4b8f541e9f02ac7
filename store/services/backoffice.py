# store/services/backoffice.py
import logging
from typing import Dict, Mapping

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from store.activity import COMPLETED, log_activity
from store.config import all_settings, update_settings, validate_setting
from store.exceptions import NothingToUpdate, StoreError
from store.models import Product, UserAccount

log = logging.getLogger(__name__)

BROADCAST_GROUP = "broadcast"


def apply_changes(instance, changes: Mapping):
    """Write allowlisted ``changes`` onto ``instance`` and save only those columns."""
    if not changes:
        raise NothingToUpdate()
    for field, value in changes.items():
        setattr(instance, field, value)
    instance.save(update_fields=list(changes))
    return instance


@transaction.atomic
def update_user(admin, user_id, changes: Dict):
    """
    ``changes`` keys: balance, is_admin, is_banned, referral_count.
    Admins cannot edit their own account through the back office.
    """
    if not changes:
        raise NothingToUpdate()

    account = UserAccount.objects.select_for_update().select_related("user").filter(user_id=user_id).first()
    if account is None:
        raise NotFound("User not found")
    if account.user_id == admin.id:
        raise StoreError("Cannot modify own account through this endpoint")

    account_fields = {k: v for k, v in changes.items() if k in ("balance", "is_banned", "referral_count")}
    if account_fields:
        apply_changes(account, account_fields)
    if "is_admin" in changes:
        account.user.is_staff = changes["is_admin"]
        account.user.save(update_fields=["is_staff"])

    log_activity(admin.id, f"Admin updated user {user_id}")
    log.info("User %s updated by admin %s: %s", user_id, admin.id, sorted(changes))
    return account.user


@transaction.atomic
def create_product(user, data: Dict) -> Product:
    """Admin uploads go live immediately; everyone else waits for approval."""
    product = Product.objects.create(user=user, is_admin_approved=user.is_staff, **data)
    log_activity(
        user.id,
        "Uploaded new product to marketplace",
        COMPLETED if user.is_staff else "Pending approval",
    )
    return product


@transaction.atomic
def update_product(admin, product_id, changes: Dict) -> Product:
    product = Product.objects.select_for_update().filter(pk=product_id).first()
    if product is None:
        raise NotFound("Product not found")
    apply_changes(product, changes)
    verb = "approved" if changes.get("is_admin_approved") else "updated"
    log_activity(product.user_id, f"Admin {verb} your marketplace product")
    return product


def save_settings(admin, values: Mapping) -> Dict[str, str]:
    """
    Persist string-valued settings and refresh the typed config.
    Non-string values are ignored, the way the front end sends extras.
    """
    accepted = {k: v for k, v in (values or {}).items() if isinstance(k, str) and isinstance(v, str)}
    if not accepted:
        raise NothingToUpdate("No valid settings to update")

    errors = {}
    for key, value in accepted.items():
        problem = validate_setting(key, value)
        if problem:
            errors[key] = [problem]
    if errors:
        raise ValidationError(errors)

    update_settings(accepted)
    log_activity(admin.id, f"Updated system settings: {', '.join(accepted)}")
    return all_settings()


def broadcast(admin, title: str, message: str) -> dict:
    """Push an announcement to every connected client and record it."""
    payload = {
        "title": title,
        "message": message,
        "sentAt": timezone.now().isoformat(),
    }
    log_activity(admin.id, f"Broadcast message: {title}")

    channel_layer = get_channel_layer()
    if channel_layer is not None:
        async_to_sync(channel_layer.group_send)(
            BROADCAST_GROUP, {"type": "broadcast.message", "broadcast": payload}
        )
    log.info("Broadcast %r sent by admin %s", title, admin.id)
    return payload
