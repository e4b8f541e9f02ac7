# store/exceptions.py
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

log = logging.getLogger(__name__)


class StoreError(APIException):
    """
    API error carrying extra context fields that are rendered next to the
    message, e.g. {"message": "...", "balance": "100.00", "required": "500.00"}.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "error"

    def __init__(self, detail=None, code=None, **context):
        super().__init__(detail, code)
        self.context = context


class Conflict(StoreError):
    default_detail = "Resource is not in a state that allows this action."
    default_code = "conflict"


class BusinessRuleViolation(StoreError):
    default_code = "business_rule"


class InsufficientBalance(BusinessRuleViolation):
    default_detail = "Insufficient balance"
    default_code = "insufficient_balance"

    def __init__(self, balance, required):
        super().__init__(balance=str(balance), required=str(required))


class InsufficientReferrals(BusinessRuleViolation):
    default_code = "insufficient_referrals"

    def __init__(self, current, needed):
        super().__init__(
            f"Not enough referrals. Need {needed} referrals to claim a free number.",
            current=current,
            needed=needed,
        )


class KycRequired(BusinessRuleViolation):
    default_detail = "KYC verification required to claim referral rewards"
    default_code = "kyc_required"


class NothingToUpdate(StoreError):
    default_detail = "No valid fields to update"
    default_code = "nothing_to_update"


def api_exception_handler(exc, context):
    """
    Render every API error as {"message": ...}. Anything DRF does not know
    about is logged and turned into a bare 500 so no traceback leaks out.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        log.exception("Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc)
        return Response({"message": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        response.data = {"message": "Validation error", "errors": response.data}
        return response

    detail = getattr(exc, "detail", None)
    if isinstance(detail, dict):
        body = {"message": str(detail.get("message") or detail.get("detail") or "Request failed"), **detail}
    else:
        body = {"message": str(detail) if detail is not None else "Request failed"}

    if isinstance(exc, StoreError):
        body["code"] = exc.get_codes()
        body.update(exc.context)

    response.data = body
    return response
