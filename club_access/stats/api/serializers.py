from rest_framework import serializers

from club_access.entries.api.serializers import EntryRecordSerializer


class DailyStatisticsQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False, input_formats=["%Y-%m-%d"])


class DailyStatisticsSerializer(serializers.Serializer):
    date = serializers.DateField()
    total_entries = serializers.IntegerField()
    pool_entries = serializers.IntegerField()
    club_entries = serializers.IntegerField()
    member_entries = serializers.IntegerField()
    non_member_entries = serializers.IntegerField()
    entries = EntryRecordSerializer(many=True)
