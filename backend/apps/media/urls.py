from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import MediaViewSet

router = SimpleRouter()
router.register("", MediaViewSet, basename="media")

urlpatterns = [
    path("", include(router.urls)),
]
