from __future__ import annotations

import logging
from typing import Any, Iterable

from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotAuthenticated, NotFound

from .ability import Ability, Permission
from .conf import get_session_service
from .context import AuthorizationContext
from .registry import build_ability, get_authorizers

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = _("Ресурс не найден.")


def get_required_permissions(view: Any, action: str | None) -> list[Permission]:
    """
    Требования маршрута из атрибута view.authorization:

        authorization = {
            "retrieve": Permission(Action.READ, "Download"),
            "*": [...],   # для остальных действий
        }
    """
    mapping = getattr(view, "authorization", None) or {}
    required = mapping.get(action) if action else None
    if required is None:
        required = mapping.get("*")
    if required is None:
        return []
    if isinstance(required, Permission):
        return [required]
    return list(required)


def run_authorization(
    context: AuthorizationContext,
    permissions: Iterable[Permission],
) -> Ability | None:
    """
    Полная проверка доступа для одного запроса/подключения.

    Возвращает Ability актёра (None для маршрутов без правил).
    Запрет по правилам и отказ authorizer'а отдаются как NotFound,
    чтобы не раскрывать существование ресурса.
    """
    session = get_session_service()
    required = list(permissions)

    if not required:
        if not session.allow_no_rules_access(context):
            raise NotAuthenticated()
        return None

    user = session.retrieve_user(context)
    if user is None:
        raise NotAuthenticated()

    ability = build_ability(user)

    for permission in required:
        if ability.can(permission.action, permission.subject):
            continue
        rule = ability.relevant_rule(permission.action, permission.subject)
        logger.info(
            "Доступ запрещён: user=%s action=%s subject=%s reason=%s",
            getattr(user, "pk", None),
            permission.action,
            permission.subject,
            rule.reason if rule else "нет подходящих правил",
        )
        raise NotFound(NOT_FOUND_MESSAGE)

    for item in get_authorizers():
        if not item.authorize(context, ability, required):
            logger.info(
                "Authorizer %s отклонил запрос user=%s",
                type(item).__name__,
                getattr(user, "pk", None),
            )
            raise NotFound(NOT_FOUND_MESSAGE)

    return ability
