from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound

__all__ = ["NotFound", "RetrievalFailed"]


class RetrievalFailed(APIException):
    """
    Ошибка хранилища при поиске ресурса.
    Отличается от NotFound и не повторяется на этом уровне.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("Не удалось получить ресурс.")
    default_code = "retrieval_failed"
