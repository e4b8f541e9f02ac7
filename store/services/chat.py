# store/services/chat.py
"""Canned-answer assistant: the first rule whose keyword appears in the message wins."""
from django.conf import settings

RULES = [
    (
        ("referral", "refer"),
        "Our referral program is simple! Share the referral code from your dashboard. "
        "Every friend who signs up with it counts towards a free number once you reach "
        "the referral target.",
    ),
    (
        ("payment", "pay", "transfer"),
        "You can pay from your wallet balance or top up by bank transfer. Submit the "
        "transfer amount on the payments page and our team will confirm it. After "
        "payment, your order is processed right away!",
    ),
    (
        ("whatsapp", "number"),
        "Our WhatsApp numbers are sourced from trusted providers and delivered after payment "
        "confirmation. After purchase, you'll receive the number and activation code. Numbers "
        "can be used for WhatsApp, Telegram, Signal, WeChat and other messaging apps!",
    ),
    (
        ("kyc", "verify", "verification"),
        "KYC verification unlocks all platform features. Open the KYC page from your dashboard, "
        "upload your ID (front and back) and a selfie. Our team reviews submissions within "
        "24 hours. Approved users can claim referral rewards and sell on the marketplace!",
    ),
    (
        ("problem", "issue", "help"),
        "I'm sorry you're experiencing issues! Please describe your problem in detail. For "
        "payment issues, contact us at {support_email} or message our admin on WhatsApp at "
        "{support_whatsapp}.",
    ),
    (
        ("price", "cost", "expensive"),
        "Number prices vary by country and service. Check the store for current pricing "
        "and special offers!",
    ),
    (
        ("wallet", "balance", "withdraw"),
        "Your wallet balance is used for purchases. Top it up from the payments page; the "
        "funds are credited as soon as our team confirms your transfer.",
    ),
    (
        ("country", "nigeria", "international"),
        "We offer numbers from many countries including Nigeria, the United States, the "
        "United Kingdom, Canada and more. Each country has different pricing and availability. "
        "Check our store for current inventory!",
    ),
    (
        ("hello", "hi", "hey"),
        "Hello! Welcome to {brand}. I'm {assistant}, your personal assistant. How may I help "
        "you today? Feel free to ask about our services, payment methods, or referral program!",
    ),
    (
        ("thank",),
        "You're welcome! If you have any other questions, feel free to ask. We appreciate your "
        "trust in {brand}!",
    ),
]

DEFAULT_REPLY = "I'm {assistant}, your virtual assistant. How can I help you today?"


def reply_for(message: str) -> str:
    text = message.lower()
    reply = DEFAULT_REPLY
    for keywords, answer in RULES:
        if any(k in text for k in keywords):
            reply = answer
            break
    return reply.format(
        brand=settings.STORE_BRAND_NAME,
        assistant=settings.ASSISTANT_NAME,
        support_email=settings.SUPPORT_EMAIL,
        support_whatsapp=settings.SUPPORT_WHATSAPP_NUMBER,
    )
