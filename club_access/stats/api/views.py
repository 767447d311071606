from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from club_access.stats.services import daily_statistics

from .serializers import DailyStatisticsQuerySerializer
from .serializers import DailyStatisticsSerializer


class StatisticsViewSet(viewsets.ViewSet):
    @action(detail=False, methods=["get"])
    @extend_schema(
        tags=["Statistics"],
        parameters=[DailyStatisticsQuerySerializer],
        responses=DailyStatisticsSerializer,
    )
    def daily(self, request):
        """Counters for a civil day (defaults to today in the club timezone)."""
        query = DailyStatisticsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        stats = daily_statistics(query.validated_data.get("date"))
        return Response(DailyStatisticsSerializer(stats).data)
