"""Serializers for Entries API."""

from rest_framework import serializers

from club_access.entries.models import EntryCategory
from club_access.entries.models import EntryRecord
from club_access.entries.models import PaymentMethod


class EntryMemberSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    dni = serializers.CharField(allow_null=True)
    photo_url = serializers.CharField(allow_null=True)


class EntryRecordSerializer(serializers.ModelSerializer):
    member = EntryMemberSerializer(read_only=True, allow_null=True)
    member_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = EntryRecord
        fields = [
            "id",
            "member_id",
            "member",
            "dni",
            "category",
            "pool_access",
            "payment_method",
            "amount",
            "created_at",
            "entry_date",
        ]
        read_only_fields = fields


class EntryCreateSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=EntryCategory.choices)
    pool_access = serializers.BooleanField()
    member_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    dni = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    amount = serializers.IntegerField(min_value=0, required=False, default=0)


class TodayQuerySerializer(serializers.Serializer):
    pool_only = serializers.BooleanField(required=False, default=False)
