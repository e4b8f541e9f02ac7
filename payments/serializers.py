from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    orderId = serializers.IntegerField(source="order_id", read_only=True)
    isTopUp = serializers.BooleanField(source="is_top_up", read_only=True)
    creditedAt = serializers.DateTimeField(source="credited_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Payment
        fields = (
            "id", "userId", "orderId", "isTopUp", "amount", "reference",
            "status", "creditedAt", "createdAt", "updatedAt",
        )
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    orderId = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def validate_amount(self, v):
        if v <= Decimal("0"):
            raise serializers.ValidationError("Amount must be greater than 0.")
        return v


class AdminPaymentUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Payment.Status.choices)
