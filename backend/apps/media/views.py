from apps.authorizer.ability import Action, Permission
from apps.authorizer.permissions import AuthorizerPermission
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import (OpenApiResponse, extend_schema,
                                   extend_schema_view)
from rest_framework import viewsets
from rest_framework.response import Response

from .authorizer import SUBJECT
from .models import Media
from .serializers import MediaSerializer


@extend_schema_view(
    list=extend_schema(
        operation_id="media_list",
        tags=["media"],
        summary=_("Список медиа"),
        description=_(
            "Возвращает медиа, доступные текущему пользователю по политике доступа: "
            "публичные, доступные авторизованным, свои и выданные явно."
        ),
        responses={
            200: OpenApiResponse(response=MediaSerializer(many=True)),
            401: OpenApiResponse(description=_("Пользователь не авторизован.")),
        },
    ),
    retrieve=extend_schema(
        operation_id="media_retrieve",
        tags=["media"],
        summary=_("Детальная информация о медиа"),
        responses={
            200: OpenApiResponse(response=MediaSerializer),
            401: OpenApiResponse(description=_("Пользователь не авторизован.")),
            404: OpenApiResponse(description=_("Медиа не найдено или недоступно.")),
        },
    ),
)
class MediaViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = MediaSerializer
    permission_classes = [AuthorizerPermission]
    lookup_url_kwarg = "media_id"
    lookup_value_regex = "[0-9a-f-]+"
    authorization = {
        "*": Permission(Action.READ, SUBJECT),
    }

    def get_queryset(self):  # pyright: ignore[reportIncompatibleMethodOverride]
        if getattr(self, "swagger_fake_view", False):
            return Media.objects.none()
        ability = self.request.ability  # pyright: ignore[reportAttributeAccessIssue]
        return (
            Media.objects.filter(ability.accessible_by(Action.READ, SUBJECT))
            .prefetch_related("videos")
            .distinct()
        )

    def retrieve(self, request, *args, **kwargs):
        # медиа уже найдено и проверено в MediaAuthorizer.authorize()
        return Response(self.get_serializer(request.media).data)
