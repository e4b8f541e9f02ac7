# payments/telegram.py
from __future__ import annotations
import html
import json
import logging
import ssl
import urllib.request
import urllib.error
from typing import Optional
from django.conf import settings
from django.utils.timezone import localtime

log = logging.getLogger(__name__)


def _build_ssl_context() -> Optional[ssl.SSLContext]:
    """
    - TELEGRAM_VERIFY_SSL = False -> unverified (dev only)
    - TELEGRAM_CA_BUNDLE set -> verify against that bundle
    - else certifi's bundle when importable, system default otherwise
    """
    if not getattr(settings, "TELEGRAM_VERIFY_SSL", True):
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return ctx

    ca_path = getattr(settings, "TELEGRAM_CA_BUNDLE", None)
    if ca_path:
        return ssl.create_default_context(cafile=ca_path)

    try:
        import certifi  # type: ignore
    except ImportError:
        return ssl.create_default_context()
    return ssl.create_default_context(cafile=certifi.where())


def notify_telegram(text: str) -> bool:
    """Best-effort ops alert. Never raises; returns whether Telegram accepted it."""
    token = getattr(settings, "TELEGRAM_BOT_TOKEN", "")
    chat_id = getattr(settings, "TELEGRAM_CHAT_ID", "")
    if not token or not chat_id:
        log.debug("Telegram not configured; skipping message.")
        return False

    body = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": "HTML",
        "disable_web_page_preview": True,
    }
    req = urllib.request.Request(
        f"https://api.telegram.org/bot{token}/sendMessage",
        data=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=12, context=_build_ssl_context()) as resp:
            if resp.status != 200:
                log.error("Telegram send failed: HTTP %s", resp.status)
                return False
    except urllib.error.URLError as e:
        log.warning("Telegram send failed (URLError): %s", e)
        return False
    except Exception:
        log.exception("Telegram send failed")
        return False
    return True


def _who(user) -> str:
    account = getattr(user, "account", None)
    full = (getattr(account, "full_name", "") or "").strip() or user.get_username()
    return f"{html.escape(full)} (@{html.escape(user.get_username())})"


def payment_alert(payment) -> str:
    ts = localtime(payment.created_at).strftime("%Y-%m-%d %H:%M:%S")
    kind = f"order #{payment.order_id}" if payment.order_id else "wallet top-up"
    return (
        f"💸 <b>New payment · {html.escape(settings.STORE_BRAND_NAME)}</b>\n"
        f"👤 User: {_who(payment.user)}\n"
        f"💰 Amount: {payment.amount}\n"
        f"🧾 For: {kind}\n"
        f"🏷️ Reference: <code>{payment.reference}</code>\n"
        f"🕒 Time: {ts}\n"
        f"🔗 Admin: mark <b>completed</b>/<b>rejected</b> after checking the transfer."
    )


def kyc_alert(kyc) -> str:
    ts = localtime(kyc.submitted_at).strftime("%Y-%m-%d %H:%M:%S")
    return (
        f"🪪 <b>New KYC submission</b>\n"
        f"👤 User: {_who(kyc.user)}\n"
        f"📄 Document: {kyc.get_id_type_display()} ••••{kyc.id_number_last4}\n"
        f"🕒 Time: {ts}\n"
        f"🔗 Admin: <b>approve</b>/<b>reject</b> in the back office."
    )
