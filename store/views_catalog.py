# store/views_catalog.py
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models_catalog import Country, Product, Service
from .permissions import IsKYCVerified, IsNotBanned
from .serializers_catalog import (
    CountrySerializer,
    ProductCreateSerializer,
    ProductSerializer,
    ServiceSerializer,
)
from .services.backoffice import create_product


class ServiceListView(generics.ListAPIView):
    """GET /api/services"""
    permission_classes = [permissions.AllowAny]
    serializer_class = ServiceSerializer
    queryset = Service.objects.filter(is_active=True)


class ServiceDetailView(generics.RetrieveAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ServiceSerializer
    queryset = Service.objects.filter(is_active=True)


class CountryListView(generics.ListAPIView):
    """GET /api/countries"""
    permission_classes = [permissions.AllowAny]
    serializer_class = CountrySerializer
    queryset = Country.objects.filter(is_active=True)


class CountryDetailView(generics.RetrieveAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = CountrySerializer
    queryset = Country.objects.filter(is_active=True)


def public_products():
    return Product.objects.filter(is_admin_approved=True, status=Product.Status.ACTIVE).select_related("user")


class ProductListCreateView(APIView):
    """
    GET  /api/products -> approved, active marketplace listings
    POST /api/products -> upload a listing (KYC-approved users and admins)
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsNotBanned(), IsKYCVerified()]

    def get(self, request):
        return Response(ProductSerializer(public_products(), many=True).data)

    def post(self, request):
        ser = ProductCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = create_product(request.user, ser.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailView(generics.RetrieveAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ProductSerializer

    def get_queryset(self):
        return public_products()


class MyProductListView(generics.ListAPIView):
    """GET /api/user/products"""
    serializer_class = ProductSerializer

    def get_queryset(self):
        return Product.objects.filter(user_id=self.request.user.id).select_related("user")
