from __future__ import annotations

from typing import Any, Callable, cast

from django.urls import re_path

from .consumers import DownloadProgressConsumer

websocket_urlpatterns: list[Any] = [
    re_path(
        r"^ws/downloads/$",
        cast(Callable[..., Any], DownloadProgressConsumer.as_asgi()),
    )
]
