import uuid
from datetime import datetime

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .constants import get_grace_period


class Download(models.Model):
    """
    Загрузка видео, начатая из просмотра.
    Публичный идентификатор — location (UUID), он же download_id в URL.
    """

    location = models.UUIDField(
        default=uuid.uuid4,
        unique=True,
        editable=False,
        verbose_name=_("Идентификатор загрузки"),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="downloads",
        verbose_name=_("Владелец"),
    )

    view = models.ForeignKey(
        "media.View",
        on_delete=models.CASCADE,
        related_name="downloads",
        verbose_name=_("Просмотр"),
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_("Создано"),
    )

    downloaded_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Скачано"),
        help_text=_("Когда клиент подтвердил завершение скачивания."),
    )

    class Meta:
        verbose_name = _("Загрузка")
        verbose_name_plural = _("Загрузки")
        ordering = ("-created_at",)

    def __str__(self) -> str:
        return str(self.location)

    @property
    def expires_at(self) -> datetime:
        return self.created_at + get_grace_period()
