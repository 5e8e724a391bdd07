from django.urls import include, path

urlpatterns = [
    path("users/", include("apps.users.urls")),
    path("media/", include("apps.media.urls")),
    path("downloads/", include("apps.downloads.urls")),
]
