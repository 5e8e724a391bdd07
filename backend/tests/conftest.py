from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable

import pytest
from apps.authorizer.context import AuthorizationContext
from apps.downloads.models import Download
from apps.media.models import Media, Video, View
from apps.users.models import Role
from django.contrib.auth import get_user_model
from rest_framework.request import Request
from rest_framework.test import APIClient, APIRequestFactory


@pytest.fixture
def api_client() -> APIClient:
    """
    DRF APIClient для запросов к endpoint’ам.
    """
    return APIClient()


@pytest.fixture
def make_user(db) -> Callable[..., Any]:
    """
    Фабрика пользователей. По умолчанию — обычный пользователь
    с подтверждённым email.
    """
    User = get_user_model()
    counter = {"n": 0}

    def _make(**extra: Any):
        counter["n"] += 1
        extra.setdefault("email", f"user{counter['n']}@example.com")
        extra.setdefault("role", Role.USER)
        extra.setdefault("confirmed_email", True)
        return User.objects.create_user(**extra)

    return _make


@pytest.fixture
def regular_user(make_user):
    return make_user(email="user@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user(email="other@example.com")


@pytest.fixture
def guest_user(make_user):
    return make_user(email="guest@example.com", role=Role.GUEST)


@pytest.fixture
def admin_user(db):
    User = get_user_model()
    return User.objects.create_superuser(
        email="admin@example.com",
        password="admin-pass",
    )


@pytest.fixture
def media(db) -> Media:
    """Медиа, доступное всем авторизованным."""
    return Media.objects.create(title="Сталкер", visibility=Media.Visibility.AUTH)


@pytest.fixture
def private_media(db, other_user) -> Media:
    """Приватное медиа чужого пользователя."""
    return Media.objects.create(
        title="Домашнее видео",
        owner=other_user,
        visibility=Media.Visibility.PRIVATE,
    )


@pytest.fixture
def make_view(db) -> Callable[..., View]:
    def _make(user, media_obj: Media) -> View:
        video = Video.objects.create(media=media_obj, location=f"videos/{media_obj.pk}.mkv")
        return View.objects.create(user=user, video=video)

    return _make


@pytest.fixture
def view(make_view, regular_user, media) -> View:
    return make_view(regular_user, media)


@pytest.fixture
def download(regular_user, view) -> Download:
    return Download.objects.create(user=regular_user, view=view)


@pytest.fixture
def http_context() -> Callable[..., AuthorizationContext]:
    """
    Контекст HTTP-запроса DRF с заданными параметрами пути.
    """
    factory = APIRequestFactory()

    def _make(user=None, action: str = "retrieve", **kwargs: Any) -> AuthorizationContext:
        request = Request(factory.get("/"))
        if user is not None:
            request.user = user
        view = SimpleNamespace(kwargs=kwargs, action=action)
        return AuthorizationContext.for_request(request, view)

    return _make


@pytest.fixture
def socket_context() -> Callable[..., AuthorizationContext]:
    def _make(user=None, **kwargs: Any) -> AuthorizationContext:
        scope = {"type": "websocket", "user": user, "url_route": {"kwargs": kwargs}}
        return AuthorizationContext.for_socket(scope)

    return _make
