"""Serializers for Members API."""

from contextlib import suppress
from pathlib import Path

from PIL import Image
from PIL.Image import UnidentifiedImageError
from rest_framework import serializers

from club_access.members.models import Member

MAX_PHOTO_MB = 5
ALLOWED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp"}


class MemberSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Member
        fields = [
            "id",
            "first_name",
            "last_name",
            "full_name",
            "dni",
            "phone",
            "email",
            "address",
            "status",
            "gender",
            "birth_date",
            "joined_on",
            "photo_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MemberWriteSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    dni = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Member.Status.choices, required=False)
    gender = serializers.ChoiceField(
        choices=Member.Gender.choices, required=False, allow_blank=True
    )
    birth_date = serializers.DateField(required=False, allow_null=True)
    joined_on = serializers.DateField(required=False)
    photo = serializers.ImageField(
        required=False,
        allow_null=True,
        write_only=True,
        help_text="Allowed: jpg, jpeg, png, webp. Max 5MB",
    )
    remove_photo = serializers.BooleanField(
        required=False, default=False, write_only=True
    )

    def validate_dni(self, value):
        if value is None:
            return value
        value = value.strip()
        if value and not value.isalnum():
            msg = "DNI may only contain letters and digits."
            raise serializers.ValidationError(msg)
        return value

    def validate_photo(self, f):
        if f is None:
            return f
        size_mb = (getattr(f, "size", 0) or 0) / (1024 * 1024)
        if size_mb > MAX_PHOTO_MB:
            msg = f"Image too large: {size_mb:.1f} MB > {MAX_PHOTO_MB} MB"
            raise serializers.ValidationError(msg)
        ext = Path(getattr(f, "name", "")).suffix
        if ext.lower() not in ALLOWED_IMAGE_EXTS:
            allowed = ", ".join(sorted(ALLOWED_IMAGE_EXTS))
            msg = f"Unsupported image type '{ext}'. Allowed: {allowed}"
            raise serializers.ValidationError(msg)
        try:
            Image.open(f).verify()
        except UnidentifiedImageError as exc:
            msg = "Invalid image file"
            raise serializers.ValidationError(msg) from exc
        finally:
            with suppress(Exception):
                f.seek(0)
        return f


class ClassificationSerializer(serializers.Serializer):
    dni = serializers.CharField()
    category = serializers.CharField()
    member = MemberSerializer(allow_null=True)
