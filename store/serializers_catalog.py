# store/serializers_catalog.py
from rest_framework import serializers

from .models_catalog import Country, Product, Service


class ServiceSerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source="is_active", default=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Service
        fields = ("id", "name", "slug", "description", "icon", "isActive", "createdAt")


class CountrySerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source="is_active", default=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Country
        fields = ("id", "name", "code", "flag", "isActive", "createdAt")

    def validate_code(self, v):
        return v.strip().upper()


class ProductSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    seller = serializers.CharField(source="user.username", read_only=True)
    isAdminApproved = serializers.BooleanField(source="is_admin_approved", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Product
        fields = (
            "id", "userId", "seller", "name", "description", "price",
            "category", "status", "isAdminApproved", "createdAt",
        )
        read_only_fields = ("status",)


class ProductCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ("name", "description", "price", "category")

    def validate_price(self, v):
        if v <= 0:
            raise serializers.ValidationError("Price must be greater than 0.")
        return v
