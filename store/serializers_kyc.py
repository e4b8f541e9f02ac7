# store/serializers_kyc.py
from rest_framework import serializers
from .models_kyc import KYCSubmission

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/heic", "image/heif")
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class KYCSubmitSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=150)
    idType = serializers.ChoiceField(choices=KYCSubmission.IdType.choices)
    idNumber = serializers.CharField(write_only=True, min_length=4, max_length=32)
    docFront = serializers.ImageField()
    docBack = serializers.ImageField()
    selfie = serializers.ImageField(required=False)

    def validate_idNumber(self, v):
        v = v.replace(" ", "")
        if not v.isalnum():
            raise serializers.ValidationError("ID number may only contain letters and digits.")
        return v

    def validate(self, data):
        # basic content-type guard
        for k in ("docFront", "docBack", "selfie"):
            f = data.get(k)
            if f is None:
                continue
            if getattr(f, "content_type", None) not in ALLOWED_IMAGE_TYPES:
                raise serializers.ValidationError({k: "Unsupported file type"})
            if f.size > MAX_IMAGE_BYTES:
                raise serializers.ValidationError({k: "File too large (max 5MB)"})
        return data


class KYCSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    fullName = serializers.CharField(source="full_name", read_only=True)
    idType = serializers.CharField(source="id_type", read_only=True)
    idNumberLast4 = serializers.CharField(source="id_number_last4", read_only=True)
    docFront = serializers.ImageField(source="doc_front", read_only=True)
    docBack = serializers.ImageField(source="doc_back", read_only=True)
    adminNote = serializers.CharField(source="admin_note", read_only=True)
    createdAt = serializers.DateTimeField(source="submitted_at", read_only=True)
    reviewedAt = serializers.DateTimeField(source="reviewed_at", read_only=True)

    class Meta:
        model = KYCSubmission
        fields = (
            "id", "userId", "fullName", "idType", "idNumberLast4",
            "docFront", "docBack", "selfie", "status", "adminNote",
            "createdAt", "reviewedAt",
        )
        read_only_fields = fields
