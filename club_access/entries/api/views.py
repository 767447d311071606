"""Views for Entries API."""

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from club_access.common import clock
from club_access.common.exceptions import InvalidInput
from club_access.common.pagination import ClubPagination
from club_access.entries import services

from .serializers import EntryCreateSerializer
from .serializers import EntryRecordSerializer
from .serializers import TodayQuerySerializer


@extend_schema_view(
    list=extend_schema(tags=["Entries"]),
    retrieve=extend_schema(tags=["Entries"]),
    create=extend_schema(
        tags=["Entries"],
        request=EntryCreateSerializer,
        responses=EntryRecordSerializer,
        description="Record a check-in at the gate. Open to the kiosk.",
    ),
)
class EntryViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = EntryRecordSerializer
    pagination_class = ClubPagination
    filter_backends = []
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action == "create":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return services.list_entries()

    def retrieve(self, request, pk=None):
        return Response(EntryRecordSerializer(services.get_entry(pk)).data)

    def create(self, request):
        ser = EntryCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        record = services.create_entry(**ser.validated_data)
        return Response(
            EntryRecordSerializer(record).data, status=status.HTTP_201_CREATED
        )

    @action(
        detail=False,
        methods=["get"],
        url_path=r"by-dni/(?P<dni>[^/]+)",
        pagination_class=None,
    )
    @extend_schema(tags=["Entries"], responses=EntryRecordSerializer(many=True))
    def by_dni(self, request, dni=None):
        entries = services.entries_for_dni(dni)
        return Response(EntryRecordSerializer(entries, many=True).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"range/(?P<start>[^/]+)/(?P<end>[^/]+)",
        url_name="range",
        pagination_class=None,
    )
    @extend_schema(tags=["Entries"], responses=EntryRecordSerializer(many=True))
    def date_range(self, request, start=None, end=None):
        """Entries between two civil dates (``YYYY-MM-DD``), both inclusive."""
        try:
            first_day = clock.parse_civil_date(start)
            last_day = clock.parse_civil_date(end)
        except ValueError as exc:
            msg = "Dates must use the YYYY-MM-DD format."
            raise InvalidInput(msg) from exc
        if first_day > last_day:
            msg = "The start date must not be after the end date."
            raise InvalidInput(msg)
        entries = services.entries_in_range(first_day, last_day)
        return Response(EntryRecordSerializer(entries, many=True).data)

    @action(detail=False, methods=["get"], pagination_class=None)
    @extend_schema(
        tags=["Entries"],
        parameters=[TodayQuerySerializer],
        responses=EntryRecordSerializer(many=True),
    )
    def today(self, request):
        query = TodayQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        entries = services.entries_on_day(pool_only=query.validated_data["pool_only"])
        return Response(EntryRecordSerializer(entries, many=True).data)
