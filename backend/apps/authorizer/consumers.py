from __future__ import annotations

from typing import Any

from channels.db import database_sync_to_async
from rest_framework.exceptions import NotAuthenticated, NotFound

from .ability import Ability, Permission
from .context import AuthorizationContext
from .guard import run_authorization

CLOSE_UNAUTHENTICATED = 4001
CLOSE_NOT_FOUND = 4004


class AuthorizedConsumerMixin:
    """
    Проверка доступа для websocket-консьюмеров.

    Консьюмер объявляет authorization = [Permission(...)] и вызывает
    authorize_socket() в connect(). При отказе соединение закрывается
    с кодом 4001 (нет пользователя) или 4004 (нет доступа).
    """

    authorization: list[Permission] = []
    scope: Any
    ability: Ability | None = None

    @database_sync_to_async
    def _run_authorization(self) -> Ability | None:
        context = AuthorizationContext.for_socket(self.scope, self)
        return run_authorization(context, self.authorization)

    async def authorize_socket(self) -> bool:
        try:
            self.ability = await self._run_authorization()
        except NotAuthenticated:
            await self.close(code=CLOSE_UNAUTHENTICATED)  # type: ignore[attr-defined]
            return False
        except NotFound:
            await self.close(code=CLOSE_NOT_FOUND)  # type: ignore[attr-defined]
            return False
        return True
