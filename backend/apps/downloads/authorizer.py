from __future__ import annotations

import logging
from typing import Any

from apps.authorizer.ability import Ability, Action, Permission, RuleBuilder
from apps.authorizer.context import AuthorizationContext
from apps.authorizer.exceptions import NotFound, RetrievalFailed
from apps.authorizer.predicates import And, Field, Relation
from apps.authorizer.registry import authorizer
from apps.media.authorizer import MediaAuthorizer
from apps.media.models import AccessPolicy
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .constants import SUBJECT, get_grace_period
from .models import Download

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = _("Загрузка не найдена.")


@authorizer
class DownloadsAuthorizer:
    """
    Права на загрузки.

    for_user():  владелец + медиа загрузки проходит политику чтения.
    authorize(): для маршрутов с download_id находит загрузку через
                 правило чтения, проверяет срок жизни и кладёт её в
                 request.download.
    """

    def for_user(self, user: Any, builder: RuleBuilder) -> None:
        if user.is_guest or user.revoked or not user.confirmed_email:
            builder.cannot(Action.MANAGE, SUBJECT).because(
                "Пользователь не может работать с загрузками"
            )
            return

        media_read = Relation("video", Relation("media", MediaAuthorizer.get_query(user, AccessPolicy.READ)))
        owned = Field("user_id", user.id)

        builder.can(Action.READ, SUBJECT, And(owned, Relation("view", media_read)))
        # новая загрузка начинается только из собственного просмотра
        builder.can(Action.CREATE, SUBJECT, And(Relation("view", And(media_read, owned)), owned))
        builder.can(Action.UPDATE, SUBJECT, And(owned, Relation("view", media_read)))

    def authorize(
        self,
        context: AuthorizationContext,
        ability: Ability,
        permissions: list[Permission],
    ) -> bool:
        if context.is_socket:
            return True

        download_id = context.params.get("download_id")
        if download_id is None:
            return True

        now = timezone.now()

        try:
            download = self._find_download(download_id, ability)
        except (ValidationError, ValueError):
            download = None
        except DatabaseError as exc:
            logger.exception("Ошибка при получении загрузки %s", download_id)
            raise RetrievalFailed(_("Не удалось получить загрузку.")) from exc

        if download is None:
            raise NotFound(NOT_FOUND_MESSAGE)

        # истёкшая загрузка неотличима от несуществующей
        if now - download.created_at >= get_grace_period():
            logger.info("Срок загрузки %s истёк", download.location)
            raise NotFound(NOT_FOUND_MESSAGE)

        context.get_request().download = download
        return True

    def _find_download(self, download_id: Any, ability: Ability) -> Download | None:
        return (
            Download.objects.filter(
                Q(location=download_id) & ability.accessible_by(Action.READ, SUBJECT)
            )
            .select_related("view__video__media")
            .distinct()
            .first()
        )
