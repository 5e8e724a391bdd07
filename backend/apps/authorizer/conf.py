from __future__ import annotations

from functools import lru_cache
from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULTS: dict[str, Any] = {
    "SESSION_SERVICE": "apps.users.session.SessionService",
}


def get_setting(name: str) -> Any:
    user_settings = getattr(settings, "AUTHORIZER", None) or {}
    return user_settings.get(name, DEFAULTS[name])


@lru_cache(maxsize=None)
def _load_service(path: str) -> Any:
    return import_string(path)()


def get_session_service() -> Any:
    """Экземпляр сервиса сессий из settings.AUTHORIZER["SESSION_SERVICE"], один на путь."""
    return _load_service(get_setting("SESSION_SERVICE"))
