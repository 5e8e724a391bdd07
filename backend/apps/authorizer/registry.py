from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from .ability import Ability, Permission, RuleBuilder
from .context import AuthorizationContext

logger = logging.getLogger(__name__)


class WillAuthorize(Protocol):
    """
    Протокол authorizer'а ресурса:
    - for_user() добавляет правила актёра в общий RuleBuilder;
    - authorize() проверяет конкретный запрос (True или исключение DRF).
    """

    def for_user(self, user: Any, builder: RuleBuilder) -> None:
        ...

    def authorize(
        self,
        context: AuthorizationContext,
        ability: Ability,
        permissions: list[Permission],
    ) -> bool:
        ...


T = TypeVar("T")

_registry: list[WillAuthorize] = []


def authorizer(cls: type[T]) -> type[T]:
    """
    Декоратор класса: регистрирует экземпляр authorizer'а.
    Модули с authorizer'ами импортируются в AppConfig.ready().
    """
    if any(type(item) is cls for item in _registry):
        return cls
    _registry.append(cls())  # type: ignore[arg-type]
    logger.debug("Authorizer зарегистрирован: %s", cls.__name__)
    return cls


def get_authorizers() -> tuple[WillAuthorize, ...]:
    return tuple(_registry)


def build_ability(user: Any) -> Ability:
    """Собирает Ability актёра из правил всех зарегистрированных authorizer'ов."""
    builder = RuleBuilder()
    for item in _registry:
        item.for_user(user, builder)
    return builder.build()
