"""Serializers for Seasons API."""

from rest_framework import serializers

from club_access.seasons.models import Season


class SeasonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Season
        fields = ["id", "name", "start_date", "end_date", "description", "created_at"]
        read_only_fields = ["id", "created_at"]
        # Overlap is checked in the registry, not by model validators
        validators = []

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and start > end:
            raise serializers.ValidationError(
                {"end_date": ["end_date must be on or after start_date."]}
            )
        return attrs


class EnrollMemberSerializer(serializers.Serializer):
    member_id = serializers.IntegerField(min_value=1)


class EnrollmentSerializer(serializers.Serializer):
    season_id = serializers.IntegerField()
    member_id = serializers.IntegerField()
    enrolled_at = serializers.DateTimeField()
