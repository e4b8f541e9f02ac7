# store/views_kyc.py
from rest_framework import status, views
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from payments.telegram import kyc_alert, notify_telegram

from .models_kyc import KYCSubmission
from .serializers_kyc import KYCSerializer, KYCSubmitSerializer
from .services.kyc import submit_kyc


class KYCView(views.APIView):
    """
    GET  /api/kyc -> current user's submission (404 when none)
    POST /api/kyc -> multipart: fullName, idType, idNumber, docFront, docBack, selfie?
    """
    parser_classes = (MultiPartParser, FormParser, JSONParser)

    def get(self, request):
        kyc = KYCSubmission.objects.filter(user_id=request.user.id).first()
        if kyc is None:
            raise NotFound("KYC not found")
        return Response(KYCSerializer(kyc, context={"request": request}).data)

    def post(self, request):
        ser = KYCSubmitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        kyc = submit_kyc(
            request.user,
            full_name=data["fullName"].strip(),
            id_type=data["idType"],
            id_number=data["idNumber"],
            doc_front=data["docFront"],
            doc_back=data["docBack"],
            selfie=data.get("selfie"),
        )
        notify_telegram(kyc_alert(kyc))
        return Response(KYCSerializer(kyc, context={"request": request}).data, status=status.HTTP_201_CREATED)
