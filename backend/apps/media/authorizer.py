from __future__ import annotations

import logging
from typing import Any

from apps.authorizer.ability import Ability, Action, Permission, RuleBuilder
from apps.authorizer.context import AuthorizationContext
from apps.authorizer.exceptions import NotFound, RetrievalFailed
from apps.authorizer.predicates import (Always, And, Field, Never, Predicate,
                                        Relation, any_of)
from apps.authorizer.registry import authorizer
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from .models import AccessPolicy, Media

logger = logging.getLogger(__name__)

SUBJECT = "Media"

# Право из MediaGrant покрывает все права не выше себя
POLICY_RANK = {
    AccessPolicy.READ: 0,
    AccessPolicy.WRITE: 1,
    AccessPolicy.DELETE: 2,
}


@authorizer
class MediaAuthorizer:
    """
    Правила доступа к медиа и предикат политики доступа,
    который переиспользуют другие ресурсы (загрузки, просмотры).
    """

    @staticmethod
    def get_query(user: Any, policy: str) -> Predicate:
        """
        Предикат над Media: может ли user получить доступ уровня policy.

        - ADMIN: без ограничений;
        - отозванный пользователь: ничего;
        - остальные: по видимости (только для READ), владению или MediaGrant.
        """
        if user.is_admin:
            return Always()
        if user.revoked:
            return Never()

        covering = [p for p, rank in POLICY_RANK.items() if rank >= POLICY_RANK[policy]]
        items: list[Predicate] = []

        if policy == AccessPolicy.READ:
            visibilities = [Media.Visibility.PUBLIC]
            if not user.is_guest:
                visibilities.append(Media.Visibility.AUTH)
            items.append(Field("visibility", visibilities, lookup="in"))

        items.append(Field("owner_id", user.id))
        items.append(
            Relation(
                "grants",
                And(Field("user_id", user.id), Field("policy", covering, lookup="in")),
            )
        )
        return any_of(items)

    def for_user(self, user: Any, builder: RuleBuilder) -> None:
        if user.revoked:
            builder.cannot(Action.MANAGE, SUBJECT).because("Доступ пользователя к медиа отозван")
            return

        if user.is_admin:
            builder.can(Action.MANAGE, SUBJECT)
            return

        builder.can(Action.READ, SUBJECT, self.get_query(user, AccessPolicy.READ))

    def authorize(
        self,
        context: AuthorizationContext,
        ability: Ability,
        permissions: list[Permission],
    ) -> bool:
        if context.is_socket:
            return True

        media_id = context.params.get("media_id")
        if media_id is None:
            return True

        try:
            media = (
                Media.objects.filter(Q(pk=media_id) & ability.accessible_by(Action.READ, SUBJECT))
                .distinct()
                .first()
            )
        except (ValidationError, ValueError):
            media = None
        except DatabaseError as exc:
            logger.exception("Ошибка при получении медиа %s", media_id)
            raise RetrievalFailed(_("Не удалось получить медиа.")) from exc

        if media is None:
            raise NotFound(_("Медиа не найдено."))

        context.get_request().media = media
        return True
