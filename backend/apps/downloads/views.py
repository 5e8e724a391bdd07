import logging

from apps.authorizer.ability import Action, Permission
from apps.authorizer.permissions import AuthorizerPermission
from apps.media.models import View
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import (OpenApiExample, OpenApiResponse,
                                   extend_schema)
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from .authorizer import NOT_FOUND_MESSAGE
from .constants import SUBJECT
from .models import Download
from .serializers import DownloadCreateSerializer, DownloadSerializer
from .services import send_download_progress

logger = logging.getLogger(__name__)


class DownloadViewSet(mixins.CreateModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Загрузки видео.

    Загрузка ищется и проверяется в DownloadsAuthorizer.authorize(),
    поэтому обработчики берут её из request.download без повторного запроса.
    """

    serializer_class = DownloadSerializer
    permission_classes = [AuthorizerPermission]
    lookup_url_kwarg = "download_id"
    lookup_value_regex = "[0-9a-f-]+"
    authorization = {
        "create": Permission(Action.CREATE, SUBJECT),
        "retrieve": Permission(Action.READ, SUBJECT),
        "downloaded": Permission(Action.UPDATE, SUBJECT),
    }

    def get_queryset(self):  # pyright: ignore[reportIncompatibleMethodOverride]
        if getattr(self, "swagger_fake_view", False):
            return Download.objects.none()
        return Download.objects.filter(
            self.request.ability.accessible_by(Action.READ, SUBJECT)  # pyright: ignore[reportAttributeAccessIssue]
        ).distinct()

    @extend_schema(
        operation_id="downloads_create",
        tags=["downloads"],
        summary=_("Начать загрузку"),
        description=_(
            "Создаёт загрузку для просмотра текущего пользователя. "
            "Медиа просмотра должно проходить политику чтения."
        ),
        request=DownloadCreateSerializer,
        responses={
            201: OpenApiResponse(response=DownloadSerializer, description=_("Загрузка создана.")),
            400: OpenApiResponse(description=_("Ошибка валидации входных данных.")),
            401: OpenApiResponse(description=_("Пользователь не авторизован.")),
            404: OpenApiResponse(description=_("Просмотр не найден или недоступен.")),
        },
        examples=[
            OpenApiExample(
                name="Новая загрузка",
                value={"view_id": 42},
                request_only=True,
            ),
        ],
    )
    def create(self, request, *args, **kwargs):
        serializer = DownloadCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        view_id = serializer.validated_data["view_id"]  # pyright: ignore[reportIndexIssue, reportOptionalSubscript]
        view = View.objects.select_related("video__media").filter(pk=view_id).first()

        download = Download(user=request.user, view=view)
        # недоступный просмотр отдаём как несуществующий
        if view is None or not request.ability.can(Action.CREATE, SUBJECT, download):
            raise NotFound(_("Просмотр не найден."))

        download.save()
        logger.info("Создана загрузка %s для user=%s", download.location, request.user.pk)

        return Response(self.get_serializer(download).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="downloads_retrieve",
        tags=["downloads"],
        summary=_("Информация о загрузке"),
        description=_(
            "Возвращает загрузку владельца, пока не истёк срок её действия. "
            "Чужая, истёкшая и несуществующая загрузка дают одинаковый 404."
        ),
        responses={
            200: OpenApiResponse(response=DownloadSerializer),
            401: OpenApiResponse(description=_("Пользователь не авторизован.")),
            404: OpenApiResponse(description=_("Загрузка не найдена.")),
        },
    )
    def retrieve(self, request, *args, **kwargs):
        return Response(self.get_serializer(request.download).data)

    @extend_schema(
        operation_id="downloads_mark_downloaded",
        tags=["downloads"],
        summary=_("Подтвердить скачивание"),
        request=None,
        responses={
            200: OpenApiResponse(response=DownloadSerializer),
            401: OpenApiResponse(description=_("Пользователь не авторизован.")),
            404: OpenApiResponse(description=_("Загрузка не найдена.")),
        },
    )
    @action(detail=True, methods=["post"], url_path="downloaded")
    def downloaded(self, request, *args, **kwargs):
        download: Download = request.download
        if not request.ability.can(Action.UPDATE, SUBJECT, download):
            raise NotFound(NOT_FOUND_MESSAGE)

        download.downloaded_at = timezone.now()
        download.save(update_fields=["downloaded_at"])
        send_download_progress(download, 1.0)

        return Response(self.get_serializer(download).data)
