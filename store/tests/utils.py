"""Shared fixtures for the store and payments test suites."""
import io
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APITestCase

from store.config import update_settings
from store.models import PhoneNumber, UserAccount

User = get_user_model()

PASSWORD = "Str0ng-pass!"


def make_user(username, balance="0", is_staff=False, **account_fields):
    user = User.objects.create_user(
        username=username, email=f"{username}@example.com", password=PASSWORD, is_staff=is_staff
    )
    UserAccount.objects.filter(user=user).update(balance=Decimal(balance), **account_fields)
    user.account.refresh_from_db()
    return user


def make_number(number="+15550000001", country="United States", price="500.00", **kwargs):
    return PhoneNumber.objects.create(number=number, country=country, price=Decimal(price), **kwargs)


def image_upload(name="doc.png", color="white"):
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), color=color).save(buf, format="PNG")
    return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")


class StoreAPITestCase(APITestCase):
    """APITestCase with a cold config cache, so Setting rows are re-read."""

    def setUp(self):
        cache.clear()
        self.addCleanup(cache.clear)

    def login(self, user):
        self.client.force_authenticate(user=user)

    def configure(self, **values):
        update_settings({k: str(v) for k, v in values.items()})
