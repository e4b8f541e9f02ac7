# store/views_admin.py
"""
Back-office endpoints. Every view here requires ``is_staff``; every mutation
leaves an admin activity record behind.
"""
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from .activity import log_activity
from .config import all_settings
from .exceptions import NothingToUpdate
from .models import KYCSubmission, Order, PhoneNumber
from .models_catalog import Country, Product, Service
from .permissions import IsStoreAdmin
from .serializers import OrderSerializer, PhoneNumberSerializer, UserSerializer
from .serializers_admin import (
    AdminKYCUpdateSerializer,
    AdminOrderUpdateSerializer,
    AdminPhoneNumberUpdateSerializer,
    AdminProductUpdateSerializer,
    AdminUserUpdateSerializer,
    BroadcastSerializer,
)
from .serializers_catalog import CountrySerializer, ProductSerializer, ServiceSerializer
from .serializers_kyc import KYCSerializer
from .services.backoffice import apply_changes, broadcast, save_settings, update_product, update_user
from .services.kyc import review_kyc
from .services.orders import update_order

User = get_user_model()


def _truthy(value) -> bool:
    return str(value).lower() in ("1", "true", "yes")


def _validated_changes(serializer_cls, request, instance=None) -> dict:
    ser = serializer_cls(instance, data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    if not ser.validated_data:
        raise NothingToUpdate()
    return dict(ser.validated_data)


class AdminView(APIView):
    permission_classes = [IsStoreAdmin]


# ---------------------------------------------------------------- users

class AdminUserListView(generics.ListAPIView):
    permission_classes = [IsStoreAdmin]
    serializer_class = UserSerializer
    queryset = User.objects.select_related("account").order_by("-date_joined")


class AdminUserUpdateView(AdminView):
    def patch(self, request, pk):
        changes = _validated_changes(AdminUserUpdateSerializer, request)
        user = update_user(request.user, pk, changes)
        user.account.refresh_from_db()
        return Response(UserSerializer(user).data)


# ---------------------------------------------------------------- phone numbers

class AdminPhoneNumberListCreateView(AdminView):
    def get(self, request):
        return Response(PhoneNumberSerializer(PhoneNumber.objects.all(), many=True).data)

    def post(self, request):
        ser = PhoneNumberSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        with transaction.atomic():
            number = ser.save()
            log_activity(request.user.id, f"Added phone number {number.number}")
        return Response(PhoneNumberSerializer(number).data, status=status.HTTP_201_CREATED)


class AdminPhoneNumberDetailView(AdminView):
    def _get(self, pk):
        number = PhoneNumber.objects.filter(pk=pk).first()
        if number is None:
            raise NotFound("Phone number not found")
        return number

    def patch(self, request, pk):
        number = self._get(pk)
        changes = _validated_changes(AdminPhoneNumberUpdateSerializer, request, number)
        with transaction.atomic():
            apply_changes(number, changes)
            log_activity(request.user.id, f"Updated phone number {number.id}")
        return Response(PhoneNumberSerializer(number).data)

    def delete(self, request, pk):
        number = self._get(pk)
        with transaction.atomic():
            label = number.number
            number.delete()
            log_activity(request.user.id, f"Deleted phone number {label}")
        return Response({"message": "Phone number deleted"})


# ---------------------------------------------------------------- orders

class AdminOrderListView(generics.ListAPIView):
    permission_classes = [IsStoreAdmin]
    serializer_class = OrderSerializer

    def get_queryset(self):
        qs = Order.objects.select_related("phone_number")
        wanted = self.request.query_params.get("status")
        return qs.filter(status=wanted) if wanted else qs


class AdminOrderUpdateView(AdminView):
    def patch(self, request, pk):
        changes = _validated_changes(AdminOrderUpdateSerializer, request)
        order = update_order(request.user, pk, changes)
        return Response(OrderSerializer(order).data)


# ---------------------------------------------------------------- kyc

class AdminKYCListView(AdminView):
    """GET /api/admin/kyc[?pending=true]"""

    def get(self, request):
        qs = KYCSubmission.objects.select_related("user")
        if _truthy(request.query_params.get("pending", "")):
            qs = qs.filter(status=KYCSubmission.Status.PENDING)
        return Response(KYCSerializer(qs, many=True, context={"request": request}).data)


class AdminKYCUpdateView(AdminView):
    def patch(self, request, pk):
        ser = AdminKYCUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        kyc = review_kyc(
            request.user,
            pk,
            ser.validated_data["status"],
            admin_note=ser.validated_data.get("admin_note"),
        )
        return Response(KYCSerializer(kyc, context={"request": request}).data)


# ---------------------------------------------------------------- products

class AdminProductListView(AdminView):
    """Listings waiting for approval."""

    def get(self, request):
        qs = Product.objects.filter(is_admin_approved=False).select_related("user")
        return Response(ProductSerializer(qs, many=True).data)


class AdminProductUpdateView(AdminView):
    def patch(self, request, pk):
        changes = _validated_changes(AdminProductUpdateSerializer, request)
        with transaction.atomic():
            product = update_product(request.user, pk, changes)
            log_activity(request.user.id, f"Updated product {product.id}")
        return Response(ProductSerializer(product).data)


# ---------------------------------------------------------------- catalog

class _CatalogListCreateView(AdminView):
    model = None
    serializer_class = None
    label = ""

    def get(self, request):
        return Response(self.serializer_class(self.model.objects.all(), many=True).data)

    def post(self, request):
        ser = self.serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        with transaction.atomic():
            obj = ser.save()
            log_activity(request.user.id, f"Created {self.label} {obj.name}")
        return Response(self.serializer_class(obj).data, status=status.HTTP_201_CREATED)


class _CatalogUpdateView(AdminView):
    model = None
    serializer_class = None
    label = ""

    def patch(self, request, pk):
        obj = self.model.objects.filter(pk=pk).first()
        if obj is None:
            raise NotFound(f"{self.label.capitalize()} not found")
        ser = self.serializer_class(obj, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        if not ser.validated_data:
            raise NothingToUpdate()
        with transaction.atomic():
            ser.save()
            log_activity(request.user.id, f"Updated {self.label} {obj.id}")
        return Response(ser.data)


class AdminServiceListCreateView(_CatalogListCreateView):
    model, serializer_class, label = Service, ServiceSerializer, "service"


class AdminServiceUpdateView(_CatalogUpdateView):
    model, serializer_class, label = Service, ServiceSerializer, "service"


class AdminCountryListCreateView(_CatalogListCreateView):
    model, serializer_class, label = Country, CountrySerializer, "country"


class AdminCountryUpdateView(_CatalogUpdateView):
    model, serializer_class, label = Country, CountrySerializer, "country"


# ---------------------------------------------------------------- settings / broadcast

class AdminSettingsView(AdminView):
    def get(self, request):
        return Response(all_settings())

    def patch(self, request):
        if not isinstance(request.data, dict):
            raise ValidationError({"message": "Settings must be a JSON object"})
        return Response(save_settings(request.user, request.data))


class AdminBroadcastView(AdminView):
    def post(self, request):
        ser = BroadcastSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        payload = broadcast(request.user, ser.validated_data["title"], ser.validated_data["message"])
        return Response({"message": "Broadcast sent", "broadcast": payload})
