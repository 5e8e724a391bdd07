from __future__ import annotations

from typing import Any, Mapping

from rest_framework.request import Request


class AuthorizationContext:
    """
    Контекст проверки доступа.

    Оборачивает либо HTTP-запрос DRF (+ view), либо scope channels-консьюмера.
    Authorizer'ы смотрят на is_socket, чтобы понять, есть ли HTTP-запрос,
    к которому можно прикрепить найденный ресурс.
    """

    def __init__(
        self,
        *,
        request: Request | None = None,
        view: Any = None,
        scope: Mapping[str, Any] | None = None,
    ) -> None:
        if (request is None) == (scope is None):
            raise ValueError("Нужен ровно один источник: request или scope.")
        self._request = request
        self._scope = scope
        self.view = view

    @classmethod
    def for_request(cls, request: Request, view: Any = None) -> "AuthorizationContext":
        return cls(request=request, view=view)

    @classmethod
    def for_socket(cls, scope: Mapping[str, Any], consumer: Any = None) -> "AuthorizationContext":
        return cls(scope=scope, view=consumer)

    @property
    def is_socket(self) -> bool:
        return self._scope is not None

    def get_request(self) -> Request:
        if self._request is None:
            raise RuntimeError("HTTP-запрос недоступен в контексте websocket.")
        return self._request

    def get_scope(self) -> Mapping[str, Any]:
        if self._scope is None:
            raise RuntimeError("Scope доступен только в контексте websocket.")
        return self._scope

    @property
    def user(self) -> Any:
        if self._scope is not None:
            return self._scope.get("user")
        return getattr(self._request, "user", None)

    @property
    def params(self) -> dict[str, Any]:
        """Параметры пути (kwargs маршрута)."""
        if self._scope is not None:
            url_route = self._scope.get("url_route") or {}
            return dict(url_route.get("kwargs") or {})
        return dict(getattr(self.view, "kwargs", None) or {})

    @property
    def action(self) -> str | None:
        """Имя действия viewset'а или HTTP-метод в нижнем регистре."""
        if self.is_socket:
            return None
        action = getattr(self.view, "action", None)
        if action:
            return action
        method = getattr(self._request, "method", None)
        return method.lower() if method else None
