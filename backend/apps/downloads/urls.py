from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import DownloadViewSet

router = SimpleRouter()
router.register("", DownloadViewSet, basename="download")

urlpatterns = [
    path("", include(router.urls)),
]
