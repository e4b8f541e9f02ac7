# store/permissions.py
from rest_framework.permissions import BasePermission

from .models import UserAccount


class IsNotBanned(BasePermission):
    message = "Account has been banned"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return True  # authentication itself is enforced elsewhere
        account = getattr(user, "account", None)
        return not (account and account.is_banned)


class IsStoreAdmin(IsNotBanned):
    """Staff only. Views that set their own permission_classes drop the
    global IsNotBanned default, so the ban check is repeated here."""
    message = "Admin privileges required"

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated and request.user.is_staff):
            return False
        if not super().has_permission(request, view):
            self.message = IsNotBanned.message
            return False
        return True


class IsKYCVerified(BasePermission):
    message = "KYC verification required to upload products"

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.user.is_staff:
            return True
        account = getattr(request.user, "account", None)
        return bool(account and account.kyc_status == UserAccount.KycStatus.APPROVED)
