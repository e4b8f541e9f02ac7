from decimal import Decimal

from django.urls import reverse

from store.models import Activity
from store.models_catalog import Country, Product, Service

from .utils import StoreAPITestCase, make_user


class PublicCatalogTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.whatsapp = Service.objects.create(name="WhatsApp", slug="whatsapp")
        self.retired = Service.objects.create(name="ICQ", slug="icq", is_active=False)
        Country.objects.create(name="Nigeria", code="NG", flag="🇳🇬")
        Country.objects.create(name="Atlantis", code="AT", is_active=False)

    def test_only_active_services_are_listed(self):
        res = self.client.get(reverse("services"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual([s["slug"] for s in res.data], ["whatsapp"])

    def test_inactive_service_is_404(self):
        self.assertEqual(self.client.get(reverse("service-detail", args=[self.whatsapp.id])).status_code, 200)
        self.assertEqual(self.client.get(reverse("service-detail", args=[self.retired.id])).status_code, 404)

    def test_only_active_countries_are_listed(self):
        res = self.client.get(reverse("countries"))
        self.assertEqual([c["code"] for c in res.data], ["NG"])


class MarketplaceTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.seller = make_user("seller", kyc_status="approved")
        self.unverified = make_user("newcomer")
        self.admin = make_user("boss", is_staff=True)

    def upload(self, user, **overrides):
        self.login(user)
        payload = {"name": "Telegram account", "price": "15.00", "category": "accounts"}
        payload.update(overrides)
        return self.client.post(reverse("products"), payload, format="json")

    def test_verified_upload_waits_for_approval(self):
        res = self.upload(self.seller)

        self.assertEqual(res.status_code, 201)
        self.assertFalse(res.data["isAdminApproved"])
        self.assertTrue(
            Activity.objects.filter(
                user=self.seller, action="Uploaded new product to marketplace", status="Pending approval"
            ).exists()
        )
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(reverse("products")).data, [])

    def test_admin_upload_is_live_immediately(self):
        res = self.upload(self.admin)

        self.assertTrue(res.data["isAdminApproved"])
        self.client.force_authenticate(user=None)
        self.assertEqual(len(self.client.get(reverse("products")).data), 1)

    def test_unverified_user_cannot_upload(self):
        res = self.upload(self.unverified)
        self.assertEqual(res.status_code, 403)
        self.assertFalse(Product.objects.exists())

    def test_price_must_be_positive(self):
        res = self.upload(self.seller, price="0")
        self.assertEqual(res.status_code, 400)

    def test_sold_products_are_hidden(self):
        Product.objects.create(user=self.admin, name="Gone", price=Decimal("1"), is_admin_approved=True, status="sold")
        self.assertEqual(self.client.get(reverse("products")).data, [])

    def test_my_products_includes_unapproved(self):
        self.upload(self.seller)
        res = self.client.get(reverse("my-products"))
        self.assertEqual([p["name"] for p in res.data], ["Telegram account"])
