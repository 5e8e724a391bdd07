from __future__ import annotations

from typing import Any

from apps.authorizer.context import AuthorizationContext


class SessionService:
    """
    Источник актёра для проверки доступа.
    Подключается через settings.AUTHORIZER["SESSION_SERVICE"].
    """

    def retrieve_user(self, context: AuthorizationContext) -> Any | None:
        """
        Аутентифицированный пользователь из запроса (HTTP) или scope (websocket).
        Анонимный пользователь -> None.
        """
        user = context.user
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        if not getattr(user, "is_active", True):
            return None
        return user

    def allow_no_rules_access(self, context: AuthorizationContext) -> bool:
        """
        Пускать ли на маршрут, у которого нет правил.

        Открыт, если view явно разрешает анонимов (allow_anonymous = True),
        иначе нужен аутентифицированный пользователь.
        """
        if getattr(context.view, "allow_anonymous", False):
            return True
        return self.retrieve_user(context) is not None
