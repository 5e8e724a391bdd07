from django.apps import AppConfig


class AuthorizerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.authorizer"
    verbose_name = "Authorizer"
