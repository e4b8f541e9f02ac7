"""
Back-office endpoints: field allowlists, settings and broadcast.
"""
from decimal import Decimal

from django.urls import reverse

from store.config import get_store_config
from store.models import Activity, PhoneNumber, Setting, UserAccount
from store.models_catalog import Country, Product, Service

from .utils import StoreAPITestCase, make_number, make_user


class AdminUserTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_user("boss", is_staff=True)
        self.user = make_user("customer", balance="10")
        self.login(self.admin)

    def test_allowlisted_fields_are_applied(self):
        res = self.client.patch(
            reverse("admin-user-update", args=[self.user.id]),
            {"balance": "250.00", "isBanned": True, "referralCount": 3},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["balance"], "250.00")
        self.assertTrue(res.data["isBanned"])
        account = UserAccount.objects.get(user=self.user)
        self.assertEqual(account.balance, Decimal("250.00"))
        self.assertEqual(account.referral_count, 3)
        self.assertTrue(Activity.objects.filter(user=self.admin, action=f"Admin updated user {self.user.id}").exists())

    def test_unknown_fields_are_dropped(self):
        res = self.client.patch(
            reverse("admin-user-update", args=[self.user.id]),
            {"isAdmin": True, "email": "hijack@example.com", "password": "x"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_staff)
        self.assertEqual(self.user.email, "customer@example.com")

    def test_only_unknown_fields_is_rejected(self):
        res = self.client.patch(
            reverse("admin-user-update", args=[self.user.id]), {"email": "x@example.com"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "No valid fields to update")

    def test_negative_balance_is_rejected(self):
        res = self.client.patch(
            reverse("admin-user-update", args=[self.user.id]), {"balance": "-1"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(UserAccount.objects.get(user=self.user).balance, Decimal("10.00"))

    def test_admin_cannot_edit_self(self):
        res = self.client.patch(
            reverse("admin-user-update", args=[self.admin.id]), {"isAdmin": False}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "Cannot modify own account through this endpoint")

    def test_user_list(self):
        res = self.client.get(reverse("admin-users"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual({u["username"] for u in res.data}, {"boss", "customer"})

    def test_regular_user_is_forbidden(self):
        self.login(self.user)
        res = self.client.get(reverse("admin-users"))
        self.assertEqual(res.status_code, 403)


class AdminPhoneNumberTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_user("boss", is_staff=True)
        self.login(self.admin)

    def test_create_and_list(self):
        res = self.client.post(
            reverse("admin-phone-numbers"),
            {"number": "+447700900123", "country": "United Kingdom", "price": "750.00"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertTrue(res.data["isAvailable"])
        self.assertEqual(len(self.client.get(reverse("admin-phone-numbers")).data), 1)

    def test_update_allowlist(self):
        number = make_number()

        res = self.client.patch(
            reverse("admin-phone-number", args=[number.id]),
            {"price": "99.99", "isAvailable": False, "number": "+10000000000"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        number.refresh_from_db()
        self.assertEqual(number.price, Decimal("99.99"))
        self.assertFalse(number.is_available)
        self.assertEqual(number.number, "+15550000001")

    def test_delete(self):
        number = make_number()
        res = self.client.delete(reverse("admin-phone-number", args=[number.id]))
        self.assertEqual(res.status_code, 200)
        self.assertFalse(PhoneNumber.objects.filter(pk=number.id).exists())

    def test_missing_number_is_404(self):
        res = self.client.patch(reverse("admin-phone-number", args=[404]), {"price": "1"}, format="json")
        self.assertEqual(res.status_code, 404)


class AdminProductTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_user("boss", is_staff=True)
        self.seller = make_user("seller", kyc_status="approved")
        self.product = Product.objects.create(user=self.seller, name="Aged account", price=Decimal("20"))
        self.login(self.admin)

    def test_pending_products_are_listed(self):
        res = self.client.get(reverse("admin-products"))
        self.assertEqual([p["id"] for p in res.data], [self.product.id])

    def test_approval_notifies_owner(self):
        res = self.client.patch(
            reverse("admin-product-update", args=[self.product.id]), {"isAdminApproved": True}, format="json"
        )

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["isAdminApproved"])
        self.assertTrue(
            Activity.objects.filter(user=self.seller, action="Admin approved your marketplace product").exists()
        )
        self.assertEqual(self.client.get(reverse("admin-products")).data, [])


class AdminCatalogTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.login(make_user("boss", is_staff=True))

    def test_create_and_update_service(self):
        res = self.client.post(
            reverse("admin-services"), {"name": "WhatsApp", "slug": "whatsapp"}, format="json"
        )
        self.assertEqual(res.status_code, 201)

        res = self.client.patch(
            reverse("admin-service-update", args=[res.data["id"]]), {"isActive": False}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertFalse(Service.objects.get(slug="whatsapp").is_active)

    def test_country_code_is_upper_cased(self):
        res = self.client.post(reverse("admin-countries"), {"name": "Nigeria", "code": "ng"}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(Country.objects.get().code, "NG")


class AdminSettingsTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_user("boss", is_staff=True)
        self.login(self.admin)

    def test_patch_updates_typed_config(self):
        self.assertEqual(get_store_config().referrals_needed, 20)

        res = self.client.patch(
            reverse("admin-settings"),
            {"REFERRALS_NEEDED": "10", "KYC_REQUIRED_FOR_REFERRAL": "false", "ignored": 5},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["REFERRALS_NEEDED"], "10")
        self.assertNotIn("ignored", res.data)
        cfg = get_store_config()
        self.assertEqual(cfg.referrals_needed, 10)
        self.assertFalse(cfg.kyc_required_for_referral)

    def test_malformed_value_is_rejected(self):
        res = self.client.patch(reverse("admin-settings"), {"REFERRALS_NEEDED": "lots"}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("REFERRALS_NEEDED", res.data["errors"])
        self.assertFalse(Setting.objects.exists())

    def test_no_string_values_is_rejected(self):
        res = self.client.patch(reverse("admin-settings"), {"REFERRALS_NEEDED": 10}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "No valid settings to update")

    def test_get_returns_map(self):
        self.configure(ADMIN_CODE="STAFF")
        res = self.client.get(reverse("admin-settings"))
        self.assertEqual(res.data, {"ADMIN_CODE": "STAFF"})


class BroadcastTests(StoreAPITestCase):
    def test_broadcast_is_recorded(self):
        admin = make_user("boss", is_staff=True)
        self.login(admin)

        res = self.client.post(
            reverse("admin-broadcast"), {"title": "Maintenance", "message": "Back soon"}, format="json"
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["broadcast"]["title"], "Maintenance")
        self.assertTrue(Activity.objects.filter(user=admin, action="Broadcast message: Maintenance").exists())
