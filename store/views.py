# store/views.py
from django.http import JsonResponse
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Activity, AiChat, Order, PhoneNumber
from .serializers import (
    ActivitySerializer,
    AiChatSerializer,
    ChatMessageSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    PhoneNumberSerializer,
    ReferralSerializer,
    UserSerializer,
)
from .services.chat import reply_for
from .services.orders import place_order
from .services.referrals import referred_users


def health(request):
    return JsonResponse({"status": "ok", "timestamp": timezone.now().isoformat()})


class ProfileView(generics.RetrieveAPIView):
    """GET /api/user/profile"""
    serializer_class = UserSerializer

    def get_object(self):
        user = self.request.user
        user.account.refresh_from_db()
        return user


class ActivityListView(generics.ListAPIView):
    """GET /api/user/activities"""
    serializer_class = ActivitySerializer

    def get_queryset(self):
        return Activity.objects.filter(user_id=self.request.user.id)


class ReferralListView(generics.ListAPIView):
    """GET /api/user/referrals -- people who signed up with my code."""
    serializer_class = ReferralSerializer

    def get_queryset(self):
        return referred_users(self.request.user.account)


class AvailablePhoneNumberListView(generics.ListAPIView):
    """GET /api/phone-numbers"""
    serializer_class = PhoneNumberSerializer

    def get_queryset(self):
        qs = PhoneNumber.objects.filter(is_available=True)
        country = self.request.query_params.get("country")
        return qs.filter(country__iexact=country) if country else qs


class OrderListCreateView(APIView):
    """
    GET  /api/orders
    POST /api/orders {phoneNumberId, isReferralReward}
      -> 201 order + whatsappRedirect {url, number, message}
    """

    def get(self, request):
        qs = Order.objects.filter(user_id=request.user.id).select_related("phone_number")
        return Response(OrderSerializer(qs, many=True).data)

    def post(self, request):
        ser = OrderCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        placed = place_order(
            request.user,
            ser.validated_data["phoneNumberId"],
            is_referral_reward=ser.validated_data["isReferralReward"],
        )
        data = OrderSerializer(placed.order).data
        data["whatsappRedirect"] = placed.whatsapp_redirect
        return Response(data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """GET /api/orders/<id> -- owner or admin only."""

    def get(self, request, pk):
        order = Order.objects.select_related("phone_number").filter(pk=pk).first()
        if order is None:
            raise NotFound("Order not found")
        if order.user_id != request.user.id and not request.user.is_staff:
            raise PermissionDenied("Access denied")
        return Response(OrderSerializer(order).data)


class AiChatView(APIView):
    """
    GET  /api/ai-chat           -> my conversation log
    POST /api/ai-chat {message} -> 201 {message, response}
    """

    def get(self, request):
        chats = AiChat.objects.filter(user_id=request.user.id)
        return Response(AiChatSerializer(chats, many=True).data)

    def post(self, request):
        ser = ChatMessageSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        message = ser.validated_data["message"]
        chat = AiChat.objects.create(user=request.user, message=message, response=reply_for(message))
        return Response(AiChatSerializer(chat).data, status=status.HTTP_201_CREATED)
