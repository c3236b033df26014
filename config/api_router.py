from django.conf import settings
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from audioroad.callers.api.views import CallerViewSet
from audioroad.calls.api.views import CallViewSet

# The dashboards call /api/callers and /api/calls/<id> without a trailing slash.
router = (
    DefaultRouter(trailing_slash=False)
    if settings.DEBUG
    else SimpleRouter(trailing_slash=False)
)

router.register("callers", CallerViewSet, basename="callers")
router.register("calls", CallViewSet, basename="calls")


app_name = "api"
urlpatterns = router.urls
