from django.apps import AppConfig


class DownloadsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.downloads"
    verbose_name = "Downloads"

    def ready(self) -> None:
        from . import authorizer  # noqa: F401  регистрация DownloadsAuthorizer
