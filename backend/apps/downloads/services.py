from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from .models import Download

logger = logging.getLogger(__name__)


def progress_group_name(user_id: int) -> str:
    return f"downloads_{user_id}"


def send_download_progress(download: Download, progress: float) -> None:
    """
    Отправляет прогресс загрузки в websocket-группу владельца.
    progress — доля от 0 до 1.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("Channel layer не настроен, прогресс %s не отправлен", download.location)
        return

    async_to_sync(channel_layer.group_send)(
        progress_group_name(download.user_id),  # pyright: ignore[reportAttributeAccessIssue]
        {
            "type": "download.progress",
            "download_id": str(download.location),
            "progress": max(0.0, min(1.0, float(progress))),
        },
    )
