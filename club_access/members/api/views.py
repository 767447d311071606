"""Views for Members API."""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser
from rest_framework.parsers import JSONParser
from rest_framework.parsers import MultiPartParser
from rest_framework.response import Response

from club_access.common.pagination import ClubPagination
from club_access.entries.classifier import classify
from club_access.members import services

from .filters import MemberFilter
from .serializers import ClassificationSerializer
from .serializers import MemberSerializer
from .serializers import MemberWriteSerializer


@extend_schema_view(
    list=extend_schema(tags=["Members"]),
    retrieve=extend_schema(tags=["Members"], responses=MemberSerializer),
    create=extend_schema(
        tags=["Members"], request=MemberWriteSerializer, responses=MemberSerializer
    ),
    update=extend_schema(
        tags=["Members"], request=MemberWriteSerializer, responses=MemberSerializer
    ),
    partial_update=extend_schema(
        tags=["Members"], request=MemberWriteSerializer, responses=MemberSerializer
    ),
    destroy=extend_schema(tags=["Members"]),
)
class MemberViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = MemberSerializer
    parser_classes = (JSONParser, MultiPartParser, FormParser)
    pagination_class = ClubPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = MemberFilter
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return services.list_members()

    def retrieve(self, request, pk=None):
        member = services.get_member(pk)
        return Response(MemberSerializer(member).data)

    def create(self, request):
        ser = MemberWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        photo = data.pop("photo", None)
        data.pop("remove_photo", None)
        member = services.create_member(data, photo=photo)
        return Response(MemberSerializer(member).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, *, partial=False):
        ser = MemberWriteSerializer(data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        photo = data.pop("photo", None)
        remove_photo = data.pop("remove_photo", False)
        member = services.update_member(
            pk, data, photo=photo, remove_photo=remove_photo
        )
        return Response(MemberSerializer(member).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        services.delete_member(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"classify/(?P<dni>[^/]+)",
        url_name="classify",
        filter_backends=[],
        pagination_class=None,
    )
    @extend_schema(tags=["Members"], responses=ClassificationSerializer)
    def classify(self, request, dni=None):
        """Tell the gate whether a DNI belongs to a club member, a pool member or
        a visitor, based on today's season."""
        result = classify(dni)
        payload = {"dni": dni, "category": result.category, "member": result.member}
        return Response(ClassificationSerializer(payload).data)
