"""Views for Seasons API."""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from club_access.common.exceptions import SeasonNotFound
from club_access.common.pagination import ClubPagination
from club_access.members.api.filters import MemberFilter
from club_access.members.api.serializers import MemberSerializer
from club_access.seasons import services

from .serializers import EnrollMemberSerializer
from .serializers import EnrollmentSerializer
from .serializers import SeasonSerializer


@extend_schema_view(
    list=extend_schema(tags=["Seasons"]),
    retrieve=extend_schema(tags=["Seasons"]),
    create=extend_schema(tags=["Seasons"]),
    update=extend_schema(tags=["Seasons"]),
    partial_update=extend_schema(tags=["Seasons"]),
    destroy=extend_schema(tags=["Seasons"]),
)
class SeasonViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = SeasonSerializer
    pagination_class = None
    filter_backends = []
    filterset_class = None
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return services.list_seasons()

    def retrieve(self, request, pk=None):
        return Response(SeasonSerializer(services.get_season(pk)).data)

    def create(self, request):
        ser = SeasonSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        season = services.create_season(ser.validated_data)
        return Response(SeasonSerializer(season).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, *, partial=False):
        season = services.get_season(pk)
        ser = SeasonSerializer(season, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        season = services.update_season(season.pk, ser.validated_data)
        return Response(SeasonSerializer(season).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        services.delete_season(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    @extend_schema(tags=["Seasons"], responses=SeasonSerializer)
    def current(self, request):
        season = services.current_season()
        if season is None:
            msg = "No season covers today."
            raise SeasonNotFound(msg)
        return Response(SeasonSerializer(season).data)

    @action(detail=True, methods=["get", "post"])
    @extend_schema(
        tags=["Season Members"],
        methods=["GET"],
        responses=MemberSerializer(many=True),
    )
    @extend_schema(
        tags=["Season Members"],
        methods=["POST"],
        request=EnrollMemberSerializer,
        responses=EnrollmentSerializer,
    )
    def members(self, request, pk=None):
        if request.method == "GET":
            members = services.members_of(pk)
            return Response(MemberSerializer(members, many=True).data)
        ser = EnrollMemberSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        enrollment = services.enroll(pk, ser.validated_data["member_id"])
        return Response(
            EnrollmentSerializer(enrollment).data, status=status.HTTP_201_CREATED
        )

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"members/(?P<member_id>\d+)",
        url_name="remove-member",
    )
    @extend_schema(tags=["Season Members"], responses=None)
    def remove_member(self, request, pk=None, member_id=None):
        services.unenroll(pk, int(member_id))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=True,
        methods=["get"],
        url_path="available-members",
        serializer_class=MemberSerializer,
        pagination_class=ClubPagination,
        filterset_class=MemberFilter,
        filter_backends=[DjangoFilterBackend],
    )
    @extend_schema(tags=["Season Members"])
    def available_members(self, request, pk=None):
        members = self.filter_queryset(services.available_members(pk))
        page = self.paginate_queryset(members)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)
