from __future__ import annotations

from typing import Any

from apps.authorizer.permissions import AuthorizerPermission
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import UserSerializer


@extend_schema(
    tags=["users"],
    summary=_("Текущий пользователь"),
    description=_(
        "Возвращает профиль текущего пользователя. "
        "Маршрут без правил доступа: достаточно действующей сессии."
    ),
    responses={
        200: OpenApiResponse(response=UserSerializer, description=_("Профиль пользователя.")),
        401: OpenApiResponse(description=_("Пользователь не авторизован.")),
    },
)
class MeAPIView(APIView):
    """
    GET /api/users/me/
    """

    permission_classes = [AuthorizerPermission]

    def get(self, request, *args: Any, **kwargs: Any) -> Response:
        return Response(UserSerializer(request.user).data)
