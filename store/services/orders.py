# store/services/orders.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from urllib.parse import quote

from django.conf import settings
from django.db import transaction
from django.db.models import F
from rest_framework.exceptions import NotFound

from store.activity import log_activity
from store.config import get_store_config
from store.exceptions import (
    Conflict,
    InsufficientBalance,
    InsufficientReferrals,
    KycRequired,
)
from store.models import Order, PhoneNumber, UserAccount

log = logging.getLogger(__name__)

PURCHASE_ACTION = "Purchased WhatsApp number"
REFERRAL_CLAIM_ACTION = "Claimed free number with referrals"


@dataclass
class PlacedOrder:
    order: Order
    whatsapp_redirect: dict


def whatsapp_redirect(order: Order, number: str) -> dict:
    """Deep link that opens a chat with support, pre-filled with the order details."""
    support = settings.SUPPORT_WHATSAPP_NUMBER
    message = (
        f"Hello, I just purchased a virtual number {number} from {settings.STORE_BRAND_NAME}. "
        f"Please process my order. My order ID is {order.id}."
    )
    digits = support.replace("+", "").replace(" ", "")
    return {
        "url": f"https://wa.me/{digits}?text={quote(message, safe='')}",
        "number": support,
        "message": message,
    }


def _lock_account(user_id) -> UserAccount:
    try:
        return UserAccount.objects.select_for_update().get(user_id=user_id)
    except UserAccount.DoesNotExist:
        raise NotFound("User not found")


def _consume_referrals(account: UserAccount) -> Decimal:
    cfg = get_store_config()
    needed = cfg.referrals_needed

    if account.referral_count < needed:
        raise InsufficientReferrals(current=account.referral_count, needed=needed)

    if cfg.kyc_required_for_referral and account.kyc_status != UserAccount.KycStatus.APPROVED:
        raise KycRequired()

    # conditional decrement: never drops below what was checked above
    updated = (
        UserAccount.objects
        .filter(pk=account.pk, referral_count__gte=needed)
        .update(referral_count=F("referral_count") - needed)
    )
    if not updated:
        account.refresh_from_db(fields=["referral_count"])
        raise InsufficientReferrals(current=account.referral_count, needed=needed)
    return Decimal("0")


def _charge_balance(account: UserAccount, price: Decimal) -> Decimal:
    if account.balance < price:
        raise InsufficientBalance(balance=account.balance, required=price)

    updated = (
        UserAccount.objects
        .filter(pk=account.pk, balance__gte=price)
        .update(balance=F("balance") - price)
    )
    if not updated:
        account.refresh_from_db(fields=["balance"])
        raise InsufficientBalance(balance=account.balance, required=price)
    return price


@transaction.atomic
def place_order(user, phone_number_id, is_referral_reward=False) -> PlacedOrder:
    """
    Buy a number with the account balance, or claim it for free with
    accumulated referrals. Exactly one balance or referral-count mutation,
    one order and one activity row per successful call.
    """
    account = _lock_account(user.id)

    number = PhoneNumber.objects.select_for_update().filter(pk=phone_number_id).first()
    if number is None:
        raise NotFound("Phone number not found")
    if not number.is_available:
        raise Conflict("Phone number is not available")

    if is_referral_reward:
        total = _consume_referrals(account)
    else:
        total = _charge_balance(account, number.price)

    # reserve the number so it cannot be sold twice
    reserved = PhoneNumber.objects.filter(pk=number.pk, is_available=True).update(is_available=False)
    if not reserved:
        raise Conflict("Phone number is not available")
    number.is_available = False

    order = Order.objects.create(
        user_id=user.id,
        phone_number=number,
        total_amount=total,
        is_referral_reward=bool(is_referral_reward),
    )
    log_activity(user.id, REFERRAL_CLAIM_ACTION if is_referral_reward else PURCHASE_ACTION)

    log.info(
        "Order %s placed: user=%s number=%s total=%s referral=%s",
        order.id, user.id, number.number, total, bool(is_referral_reward),
    )
    return PlacedOrder(order=order, whatsapp_redirect=whatsapp_redirect(order, number.number))


@transaction.atomic
def update_order(admin, order_id, changes: dict) -> Order:
    """
    Back-office edit of an order. Only ``status`` and ``code`` reach here;
    the amount is fixed at creation.
    """
    order = Order.objects.select_for_update().filter(pk=order_id).first()
    if order is None:
        raise NotFound("Order not found")

    previous_status = order.status
    for field in ("status", "code"):
        if field in changes:
            setattr(order, field, changes[field])
    order.save(update_fields=[f for f in ("status", "code") if f in changes] + ["updated_at"])

    if changes.get("status") == Order.Status.COMPLETED and previous_status != Order.Status.COMPLETED:
        log_activity(order.user_id, REFERRAL_CLAIM_ACTION if order.is_referral_reward else PURCHASE_ACTION)

    if "status" in changes:
        log_activity(admin.id, f"Updated order {order.id} status to {order.status}")
    else:
        log_activity(admin.id, f"Updated order {order.id}")

    log.info("Order %s updated by admin %s: %s", order.id, admin.id, changes)
    return order
