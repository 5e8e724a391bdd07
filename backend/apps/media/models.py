import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class AccessPolicy(models.TextChoices):
    READ = "read", _("Просмотр")
    WRITE = "write", _("Изменение")
    DELETE = "delete", _("Удаление")


class Media(models.Model):
    """
    Фильм/сериал/ролик. Видимость определяет, кому он доступен
    без явной выдачи прав (MediaGrant).
    """

    class Visibility(models.TextChoices):
        PRIVATE = "private", _("Только владелец")
        AUTH = "auth", _("Все авторизованные пользователи")
        PUBLIC = "public", _("Доступен всем")

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        verbose_name=_("ID медиа"),
    )

    title = models.CharField(
        max_length=255,
        verbose_name=_("Название"),
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="media",
        verbose_name=_("Владелец"),
        help_text=_("Пользователь, добавивший медиа. Может быть пустым для каталога."),
    )

    visibility = models.CharField(
        max_length=16,
        choices=Visibility.choices,
        default=Visibility.AUTH,
        verbose_name=_("Уровень доступа"),
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True, verbose_name=_("Создано"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("Обновлено"))

    class Meta:
        verbose_name = _("Медиа")
        verbose_name_plural = _("Медиа")
        ordering = ("title",)

    def __str__(self) -> str:
        return self.title


class MediaGrant(models.Model):
    """Явная выдача права на медиа конкретному пользователю."""

    media = models.ForeignKey(
        Media,
        on_delete=models.CASCADE,
        related_name="grants",
        verbose_name=_("Медиа"),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="media_grants",
        verbose_name=_("Пользователь"),
    )
    policy = models.CharField(
        max_length=16,
        choices=AccessPolicy.choices,
        default=AccessPolicy.READ,
        verbose_name=_("Право"),
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Создано"))

    class Meta:
        verbose_name = _("Доступ к медиа")
        verbose_name_plural = _("Доступы к медиа")
        unique_together = ("media", "user", "policy")

    def __str__(self) -> str:
        return f"{self.user_id}:{self.media_id} ({self.policy})"  # pyright: ignore[reportAttributeAccessIssue]


class Video(models.Model):
    media = models.ForeignKey(
        Media,
        on_delete=models.CASCADE,
        related_name="videos",
        verbose_name=_("Медиа"),
    )
    location = models.CharField(
        max_length=1024,
        verbose_name=_("Путь к источнику"),
        help_text=_("Ключ (путь) исходного файла видео в хранилище."),
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Создано"))

    class Meta:
        verbose_name = _("Видео")
        verbose_name_plural = _("Видео")

    def __str__(self) -> str:
        return self.location


class View(models.Model):
    """Факт просмотра видео пользователем. Родитель для загрузок."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="views",
        verbose_name=_("Пользователь"),
    )
    video = models.ForeignKey(
        Video,
        on_delete=models.CASCADE,
        related_name="views",
        verbose_name=_("Видео"),
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True, verbose_name=_("Создано"))

    class Meta:
        verbose_name = _("Просмотр")
        verbose_name_plural = _("Просмотры")
        ordering = ("-created_at",)

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.video_id}"  # pyright: ignore[reportAttributeAccessIssue]
