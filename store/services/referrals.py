# store/services/referrals.py
import logging

from django.db.models import F

from store.config import get_store_config
from store.models import UserAccount

log = logging.getLogger(__name__)


def is_valid_referral_code(code: str) -> bool:
    """A referral code is either the configured admin code or a user's own code."""
    code = (code or "").strip()
    if not code:
        return False
    admin_code = get_store_config().admin_code
    if admin_code and code == admin_code:
        return True
    return UserAccount.objects.filter(referral_code=code).exists()


def credit_referrer(code: str, new_user_id) -> bool:
    """Give the owner of ``code`` one referral. The admin code credits nobody."""
    updated = (
        UserAccount.objects
        .filter(referral_code=code)
        .exclude(user_id=new_user_id)
        .update(referral_count=F("referral_count") + 1)
    )
    if updated:
        log.info("Referral credited: code=%s new_user=%s", code, new_user_id)
    return bool(updated)


def referred_users(account: UserAccount):
    return (
        UserAccount.objects
        .filter(referred_by=account.referral_code)
        .select_related("user")
        .order_by("-created_at")
    )
