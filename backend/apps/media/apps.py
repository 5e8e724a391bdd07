from django.apps import AppConfig


class MediaConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.media"
    verbose_name = "Media"

    def ready(self) -> None:
        from . import authorizer  # noqa: F401  регистрация MediaAuthorizer
