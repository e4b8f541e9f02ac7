import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .activity import log_activity
from .auth_serializers import RegisterSerializer, StoreTokenObtainPairSerializer, tokens_for
from .permissions import IsNotBanned
from .serializers import UserSerializer

log = logging.getLogger(__name__)


class RegisterView(generics.CreateAPIView):
    """
    POST /api/auth/register
    body: { username, email, password, fullName?, referredBy? }
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = RegisterSerializer

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = ser.save()
        log_activity(user.id, "User registration")
        log.info("User %s registered (referred_by=%s)", user.id, user.account.referred_by or "-")
        return Response(
            {"message": "User registered successfully", "user": UserSerializer(user).data, **tokens_for(user)},
            status=status.HTTP_201_CREATED,
        )


class LoginView(TokenObtainPairView):
    """POST /api/auth/login {email|username|identifier, password}"""
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = StoreTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        log_activity(ser.user.id, "User login")
        return Response({"message": "Login successful", **ser.validated_data}, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsNotBanned]

    def post(self, request):
        token_str = request.data.get("refresh")
        if not token_str:
            return Response({"message": "refresh token required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            RefreshToken(token_str).blacklist()
        except TokenError:
            log.info("Logout with an invalid or already blacklisted token for user %s", request.user.id)
        return Response(status=status.HTTP_205_RESET_CONTENT)
