from django.contrib.auth import get_user_model, password_validation
from django.db import transaction
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import UserSerializer
from .services.referrals import credit_referrer, is_valid_referral_code

User = get_user_model()


def tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {"token": str(refresh.access_token), "refresh": str(refresh)}


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    fullName = serializers.CharField(max_length=150, required=False, allow_blank=True)
    referredBy = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_email(self, v):
        if User.objects.filter(email__iexact=v).exists():
            raise serializers.ValidationError("Email already in use")
        return v.lower()

    def validate_username(self, v):
        if User.objects.filter(username__iexact=v).exists():
            raise serializers.ValidationError("Username already taken")
        return v

    def validate_referredBy(self, v):
        v = (v or "").strip()
        if v and not is_valid_referral_code(v):
            raise serializers.ValidationError("Invalid referral code")
        return v

    def validate(self, attrs):
        candidate = User(username=attrs["username"], email=attrs["email"])
        password_validation.validate_password(attrs["password"], candidate)
        return attrs

    @transaction.atomic
    def create(self, validated):
        user = User.objects.create_user(
            username=validated["username"],
            email=validated["email"],
            password=validated["password"],
        )
        account = user.account
        account.full_name = validated.get("fullName", "").strip()
        account.referred_by = validated.get("referredBy", "")
        account.save(update_fields=["full_name", "referred_by"])

        if account.referred_by:
            credit_referrer(account.referred_by, user.id)
        return user


class StoreTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Allows login with either username or email + password, then refuses
    banned accounts.
    Accepted payloads:
      { "email": "...",    "password": "..." }
      { "username": "...", "password": "..." }
      { "identifier": "...", "password": "..." }  # either username or email
    """
    default_error_messages = {
        "no_active_account": "Invalid credentials",
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        username_field = self.username_field
        field_cls = self.fields[username_field].__class__
        self.fields[username_field] = field_cls(required=False, allow_blank=True)
        self.fields.setdefault("email", field_cls(required=False, allow_blank=True))
        self.fields.setdefault("identifier", field_cls(required=False, allow_blank=True))

    def validate(self, attrs):
        username_field = self.username_field
        identifier = (
            attrs.get("identifier")
            or attrs.get("email")
            or attrs.get(username_field)
        )
        if not identifier or not attrs.get("password"):
            raise serializers.ValidationError("Email and password are required")

        # the auth backend resolves either an email or a username
        attrs[username_field] = identifier.strip()
        data = super().validate(attrs)

        account = getattr(self.user, "account", None)
        if account and account.is_banned:
            raise exceptions.PermissionDenied("Account has been banned")

        return {
            "user": UserSerializer(self.user).data,
            "token": data["access"],
            "refresh": data["refresh"],
        }
