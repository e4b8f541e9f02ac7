"""
Order placement: balance purchases and referral claims.
"""
from decimal import Decimal

from django.urls import reverse

from store.models import Activity, Order, UserAccount

from .utils import StoreAPITestCase, make_number, make_user


class BalancePurchaseTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.user = make_user("buyer", balance="1000")
        self.number = make_number(price="500.00")
        self.login(self.user)

    def test_purchase_debits_balance_and_creates_order(self):
        res = self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["totalAmount"], "500.00")
        self.assertEqual(res.data["status"], Order.Status.PENDING)
        self.assertFalse(res.data["isReferralReward"])

        account = UserAccount.objects.get(user=self.user)
        self.assertEqual(account.balance, Decimal("500.00"))
        self.assertEqual(Order.objects.filter(user=self.user).count(), 1)
        self.assertTrue(
            Activity.objects.filter(user=self.user, action="Purchased WhatsApp number", status="Completed").exists()
        )

    def test_purchase_marks_number_unavailable(self):
        self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        self.number.refresh_from_db()
        self.assertFalse(self.number.is_available)
        self.assertEqual(self.client.get(reverse("phone-numbers")).data, [])

    def test_response_carries_whatsapp_redirect(self):
        res = self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        redirect = res.data["whatsappRedirect"]
        self.assertTrue(redirect["url"].startswith("https://wa.me/2347088501777?text="))
        self.assertEqual(redirect["number"], "+2347088501777")
        self.assertIn(self.number.number, redirect["message"])
        self.assertIn(f"My order ID is {res.data['id']}", redirect["message"])

    def test_insufficient_balance_reports_balance_and_price(self):
        UserAccount.objects.filter(user=self.user).update(balance=Decimal("100"))

        res = self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "Insufficient balance")
        self.assertEqual(res.data["balance"], "100.00")
        self.assertEqual(res.data["required"], "500.00")
        self.assertFalse(Order.objects.exists())
        self.number.refresh_from_db()
        self.assertTrue(self.number.is_available)

    def test_exact_balance_is_enough(self):
        UserAccount.objects.filter(user=self.user).update(balance=Decimal("500.00"))

        res = self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(UserAccount.objects.get(user=self.user).balance, Decimal("0.00"))

    def test_number_cannot_be_sold_twice(self):
        other = make_user("second", balance="1000")
        self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        self.login(other)
        res = self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "Phone number is not available")
        self.assertEqual(UserAccount.objects.get(user=other).balance, Decimal("1000.00"))

    def test_unknown_number_is_404(self):
        res = self.client.post(reverse("orders"), {"phoneNumberId": 999}, format="json")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["message"], "Phone number not found")

    def test_missing_number_id_is_validation_error(self):
        res = self.client.post(reverse("orders"), {}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "Validation error")
        self.assertIn("phoneNumberId", res.data["errors"])

    def test_unauthenticated_request_is_rejected(self):
        self.client.force_authenticate(user=None)
        res = self.client.post(reverse("orders"), {"phoneNumberId": self.number.id}, format="json")
        self.assertEqual(res.status_code, 401)


class ReferralClaimTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.user = make_user("referrer", balance="50", referral_count=20)
        self.number = make_number(price="500.00")
        self.login(self.user)

    def claim(self):
        return self.client.post(
            reverse("orders"),
            {"phoneNumberId": self.number.id, "isReferralReward": True},
            format="json",
        )

    def test_claim_consumes_referrals_and_keeps_balance(self):
        self.configure(KYC_REQUIRED_FOR_REFERRAL="false")

        res = self.claim()

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["totalAmount"], "0.00")
        self.assertTrue(res.data["isReferralReward"])
        account = UserAccount.objects.get(user=self.user)
        self.assertEqual(account.referral_count, 0)
        self.assertEqual(account.balance, Decimal("50.00"))
        self.assertTrue(Activity.objects.filter(user=self.user, action="Claimed free number with referrals").exists())

    def test_claim_with_too_few_referrals(self):
        self.configure(KYC_REQUIRED_FOR_REFERRAL="false")
        UserAccount.objects.filter(user=self.user).update(referral_count=19)

        res = self.claim()

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["current"], 19)
        self.assertEqual(res.data["needed"], 20)
        self.assertEqual(res.data["message"], "Not enough referrals. Need 20 referrals to claim a free number.")
        self.assertEqual(UserAccount.objects.get(user=self.user).referral_count, 19)
        self.assertFalse(Order.objects.exists())

    def test_claim_requires_kyc_by_default(self):
        res = self.claim()

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "kyc_required")
        self.assertEqual(UserAccount.objects.get(user=self.user).referral_count, 20)

    def test_claim_with_approved_kyc(self):
        UserAccount.objects.filter(user=self.user).update(kyc_status=UserAccount.KycStatus.APPROVED)

        res = self.claim()

        self.assertEqual(res.status_code, 201)
        self.assertEqual(UserAccount.objects.get(user=self.user).referral_count, 0)

    def test_configured_threshold_is_used(self):
        self.configure(REFERRALS_NEEDED=5, KYC_REQUIRED_FOR_REFERRAL="false")
        UserAccount.objects.filter(user=self.user).update(referral_count=7)

        res = self.claim()

        self.assertEqual(res.status_code, 201)
        self.assertEqual(UserAccount.objects.get(user=self.user).referral_count, 2)


class OrderVisibilityTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.owner = make_user("owner", balance="1000")
        self.stranger = make_user("stranger")
        self.admin = make_user("boss", is_staff=True)
        self.number = make_number()
        self.login(self.owner)
        self.order_id = self.client.post(
            reverse("orders"), {"phoneNumberId": self.number.id}, format="json"
        ).data["id"]

    def test_owner_sees_order(self):
        res = self.client.get(reverse("order-detail", args=[self.order_id]))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["phoneNumber"]["number"], self.number.number)

    def test_other_user_is_denied(self):
        self.login(self.stranger)
        res = self.client.get(reverse("order-detail", args=[self.order_id]))
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["message"], "Access denied")

    def test_admin_sees_any_order(self):
        self.login(self.admin)
        res = self.client.get(reverse("order-detail", args=[self.order_id]))
        self.assertEqual(res.status_code, 200)

    def test_list_only_contains_own_orders(self):
        self.login(self.stranger)
        self.assertEqual(self.client.get(reverse("orders")).data, [])
        self.login(self.owner)
        self.assertEqual(len(self.client.get(reverse("orders")).data), 1)


class AdminOrderUpdateTests(StoreAPITestCase):
    def setUp(self):
        super().setUp()
        self.user = make_user("buyer", balance="1000")
        self.admin = make_user("boss", is_staff=True)
        number = make_number()
        self.login(self.user)
        self.order_id = self.client.post(
            reverse("orders"), {"phoneNumberId": number.id}, format="json"
        ).data["id"]
        self.login(self.admin)

    def test_complete_order_with_code(self):
        res = self.client.patch(
            reverse("admin-order-update", args=[self.order_id]),
            {"status": "completed", "code": "123-456"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        order = Order.objects.get(pk=self.order_id)
        self.assertEqual(order.status, Order.Status.COMPLETED)
        self.assertEqual(order.code, "123-456")
        self.assertTrue(
            Activity.objects.filter(user=self.admin, action=f"Updated order {self.order_id} status to completed").exists()
        )

    def test_amount_is_not_editable(self):
        res = self.client.patch(
            reverse("admin-order-update", args=[self.order_id]),
            {"totalAmount": "1.00"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["message"], "No valid fields to update")
        self.assertEqual(Order.objects.get(pk=self.order_id).total_amount, Decimal("500.00"))

    def test_rejecting_does_not_refund(self):
        self.client.patch(reverse("admin-order-update", args=[self.order_id]), {"status": "rejected"}, format="json")
        self.assertEqual(UserAccount.objects.get(user=self.user).balance, Decimal("500.00"))

    def test_non_admin_is_forbidden(self):
        self.login(self.user)
        res = self.client.patch(reverse("admin-order-update", args=[self.order_id]), {"status": "completed"}, format="json")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["message"], "Admin privileges required")
