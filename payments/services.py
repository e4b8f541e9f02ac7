# payments/services.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from store.activity import COMPLETED, PENDING, log_activity
from store.exceptions import Conflict
from store.models import Order, UserAccount

from .models import Payment

log = logging.getLogger(__name__)


@transaction.atomic
def submit_payment(user, amount: Decimal, order_id: Optional[int] = None) -> Payment:
    """
    Record a payment the user says they made. Without ``order_id`` it is a
    balance top-up; with one, the order must be the caller's and still pending.
    """
    order = None
    if order_id:
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFound("Order not found")
        if order.user_id != user.id:
            raise PermissionDenied("Order doesn't belong to user")
        if order.status != Order.Status.PENDING:
            raise Conflict("Order is not pending payment")

    payment = Payment.objects.create(user_id=user.id, order=order, amount=amount)
    log_activity(
        user.id,
        "Payment submitted for order" if order else "Added funds to account",
        PENDING,
    )
    log.info("Payment %s submitted: user=%s amount=%s order=%s", payment.reference, user.id, amount, order_id)
    return payment


def _credit_top_up(payment: Payment) -> bool:
    """Credit a top-up to the balance at most once, keyed on ``credited_at``."""
    claimed = (
        Payment.objects
        .filter(pk=payment.pk, order__isnull=True, credited_at__isnull=True)
        .update(credited_at=timezone.now())
    )
    if not claimed:
        return False
    UserAccount.objects.select_for_update().get(user_id=payment.user_id)
    UserAccount.objects.filter(user_id=payment.user_id).update(balance=F("balance") + payment.amount)
    log_activity(payment.user_id, "Added funds to account", COMPLETED)
    return True


@transaction.atomic
def set_payment_status(admin, payment_id, status: str) -> Payment:
    """
    Admin transition of a payment. Repeating the current status is a no-op
    and a completed payment is final. Completing a top-up credits the
    balance; completing an order payment is bookkeeping only, since the
    balance was charged when the order was placed.
    """
    payment = Payment.objects.select_for_update().filter(pk=payment_id).first()
    if payment is None:
        raise NotFound("Payment not found")

    if payment.status == status:
        return payment
    if payment.status == Payment.Status.COMPLETED:
        raise Conflict("Completed payments cannot change status", status=payment.status)

    payment.status = status
    payment.save(update_fields=["status", "updated_at"])

    if status == Payment.Status.COMPLETED and payment.is_top_up:
        if _credit_top_up(payment):
            log.info("Top-up %s credited: user=%s amount=%s", payment.reference, payment.user_id, payment.amount)
        payment.refresh_from_db()

    log_activity(admin.id, f"Updated payment {payment.id} status to {status}")
    return payment
