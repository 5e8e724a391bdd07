from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager["User"]):
    use_in_migrations = True

    def _create_user(
        self,
        email: str,
        password: str | None,
        **extra_fields: Any,
    ) -> "User":
        if not email:
            raise ValueError(_("Требуется email."))

        email = self.normalize_email(email)
        # если display_name не передали — берём часть до @
        extra_fields.setdefault("display_name", email.split("@")[0])

        user: User = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_user(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> "User":
        """
        Обычный пользователь:
        - is_staff=False, is_superuser=False
        - роль USER, email ещё не подтверждён.
        """
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", Role.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(
        self,
        email: str,
        password: str | None = None,
        **extra_fields: Any,
    ) -> "User":
        """
        Администратор / суперпользователь:
        - обязан иметь пароль;
        - роль ADMIN, email считается подтверждённым.
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", Role.ADMIN)
        extra_fields.setdefault("confirmed_email", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError(_("Суперпользователь обязан иметь is_staff=True."))
        if extra_fields.get("is_superuser") is not True:
            raise ValueError(_("Суперпользователь обязан иметь is_superuser=True."))
        if not password:
            raise ValueError(_("Администратор/суперпользователь должен иметь пароль."))

        return self._create_user(email, password, **extra_fields)


class Role(models.TextChoices):
    GUEST = "guest", _("Гость")
    USER = "user", _("Пользователь")
    ADMIN = "admin", _("Администратор")


class User(AbstractUser):
    username = None
    email = models.EmailField(_("Email"), unique=True)
    display_name = models.CharField(_("Отображаемое имя"), max_length=150)
    role = models.CharField(
        _("Роль"),
        max_length=16,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
    )
    revoked = models.BooleanField(
        _("Доступ отозван"),
        default=False,
        help_text=_("Отозванный пользователь не получает никаких прав на ресурсы."),
    )
    confirmed_email = models.BooleanField(
        _("Email подтверждён"),
        default=False,
        help_text=_("Отмечается после подтверждения email по коду или ссылке."),
    )

    objects: CustomUserManager = CustomUserManager()  # type: ignore[assignment]

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = []  # type: ignore[assignment]

    class Meta:
        verbose_name = _("Пользователь")
        verbose_name_plural = _("Пользователи")

    def __str__(self) -> str:
        return self.display_name or self.email

    @property
    def is_guest(self) -> bool:
        return self.role == Role.GUEST

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
