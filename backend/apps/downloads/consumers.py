from __future__ import annotations

import json
from typing import Any

from apps.authorizer.ability import Action, Permission
from apps.authorizer.consumers import AuthorizedConsumerMixin
from channels.generic.websocket import AsyncWebsocketConsumer

from .constants import SUBJECT
from .services import progress_group_name


class DownloadProgressConsumer(AuthorizedConsumerMixin, AsyncWebsocketConsumer):
    """
    ws/downloads/ — прогресс загрузок текущего пользователя.
    """

    authorization = [Permission(Action.READ, SUBJECT)]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.group_name: str | None = None

    async def connect(self) -> None:
        if not await self.authorize_socket():
            return

        self.group_name = progress_group_name(self.scope["user"].id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code: int) -> None:
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def download_progress(self, event: dict[str, Any]) -> None:
        await self.send(
            text_data=json.dumps(
                {
                    "type": "progress",
                    "download_id": event.get("download_id"),
                    "progress": event.get("progress"),
                }
            )
        )
