from __future__ import annotations

from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from store.permissions import IsStoreAdmin

from .models import Payment
from .serializers import AdminPaymentUpdateSerializer, PaymentCreateSerializer, PaymentSerializer
from .services import set_payment_status, submit_payment
from .telegram import notify_telegram, payment_alert


class PaymentListCreateView(APIView):
    """
    GET  /api/payments
    POST /api/payments { amount, orderId? }
    Without orderId the payment is a wallet top-up, credited once an
    admin marks it completed. Also sends a Telegram alert.
    """

    def get(self, request):
        qs = Payment.objects.filter(user_id=request.user.id)
        return Response(PaymentSerializer(qs, many=True).data)

    def post(self, request):
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        payment = submit_payment(
            request.user,
            ser.validated_data["amount"],
            order_id=ser.validated_data.get("orderId"),
        )
        notify_telegram(payment_alert(payment))
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class AdminPaymentListView(generics.ListAPIView):
    """GET /api/admin/payments[?pending=true]"""
    permission_classes = [IsStoreAdmin]
    serializer_class = PaymentSerializer

    def get_queryset(self):
        qs = Payment.objects.select_related("user")
        if self.request.query_params.get("pending") in ("1", "true", "True"):
            qs = qs.filter(status=Payment.Status.PENDING)
        return qs


class AdminPaymentUpdateView(APIView):
    """PATCH /api/admin/payments/<id> { status }"""
    permission_classes = [IsStoreAdmin]

    def patch(self, request, pk):
        ser = AdminPaymentUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        payment = set_payment_status(request.user, pk, ser.validated_data["status"])
        return Response(PaymentSerializer(payment).data)
