# store/config.py
"""
Typed view over the back-office ``Setting`` rows.

The rows stay plain strings so ops can add keys freely; the values the
settlement code depends on are parsed once into ``StoreConfig`` and kept in
the cache until an admin write refreshes them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from django.core.cache import cache
from django.db import transaction

from .models import Setting

log = logging.getLogger(__name__)

CACHE_KEY = "store:config"

ADMIN_CODE = "ADMIN_CODE"
REFERRALS_NEEDED = "REFERRALS_NEEDED"
KYC_REQUIRED_FOR_REFERRAL = "KYC_REQUIRED_FOR_REFERRAL"

DEFAULT_REFERRALS_NEEDED = 20
DEFAULT_KYC_REQUIRED_FOR_REFERRAL = True


@dataclass(frozen=True)
class StoreConfig:
    admin_code: str = ""
    referrals_needed: int = DEFAULT_REFERRALS_NEEDED
    kyc_required_for_referral: bool = DEFAULT_KYC_REQUIRED_FOR_REFERRAL


def _parse_int(key: str, raw: str, default: int) -> int:
    try:
        value = int(raw.strip())
    except (TypeError, ValueError):
        log.warning("Setting %s=%r is not an integer; using %s", key, raw, default)
        return default
    if value < 0:
        log.warning("Setting %s=%r is negative; using %s", key, raw, default)
        return default
    return value


def _parse_bool(key: str, raw: str, default: bool) -> bool:
    v = raw.strip().lower()
    if v == "true":
        return True
    if v == "false":
        return False
    log.warning("Setting %s=%r is not true/false; using %s", key, raw, default)
    return default


def all_settings() -> Dict[str, str]:
    return dict(Setting.objects.values_list("key", "value"))


def load_store_config() -> StoreConfig:
    raw = all_settings()
    fields = {"admin_code": raw.get(ADMIN_CODE, "").strip()}
    if REFERRALS_NEEDED in raw:
        fields["referrals_needed"] = _parse_int(REFERRALS_NEEDED, raw[REFERRALS_NEEDED], DEFAULT_REFERRALS_NEEDED)
    if KYC_REQUIRED_FOR_REFERRAL in raw:
        fields["kyc_required_for_referral"] = _parse_bool(
            KYC_REQUIRED_FOR_REFERRAL, raw[KYC_REQUIRED_FOR_REFERRAL], DEFAULT_KYC_REQUIRED_FOR_REFERRAL
        )
    return StoreConfig(**fields)


def refresh_store_config() -> StoreConfig:
    cfg = load_store_config()
    cache.set(CACHE_KEY, cfg, timeout=None)
    return cfg


def get_store_config() -> StoreConfig:
    cfg = cache.get(CACHE_KEY)
    if cfg is None:
        cfg = refresh_store_config()
    return cfg


def validate_setting(key: str, value: str) -> str | None:
    """Return an error message for a value the typed config cannot use."""
    if key == REFERRALS_NEEDED and not value.strip().isdigit():
        return "Must be a non-negative whole number."
    if key == KYC_REQUIRED_FOR_REFERRAL and value.strip().lower() not in ("true", "false"):
        return 'Must be "true" or "false".'
    return None


def update_settings(values: Mapping[str, str]) -> StoreConfig:
    with transaction.atomic():
        for key, value in values.items():
            Setting.objects.update_or_create(key=key, defaults={"value": value})
    cfg = refresh_store_config()
    log.info("Store settings updated: %s", ", ".join(values))
    return cfg
