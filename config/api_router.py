from django.conf import settings
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from club_access.entries.api.views import EntryViewSet
from club_access.members.api.views import MemberViewSet
from club_access.seasons.api.views import SeasonViewSet
from club_access.stats.api.views import StatisticsViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("entries", EntryViewSet, basename="entries")
router.register("members", MemberViewSet, basename="members")
router.register("seasons", SeasonViewSet, basename="seasons")
router.register("statistics", StatisticsViewSet, basename="statistics")


app_name = "api"
urlpatterns = router.urls
