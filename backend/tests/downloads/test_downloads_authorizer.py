from __future__ import annotations

import uuid
from datetime import timedelta
from types import SimpleNamespace

import pytest
from apps.authorizer.ability import Action, RuleBuilder
from apps.authorizer.exceptions import RetrievalFailed
from apps.downloads.authorizer import DownloadsAuthorizer
from apps.downloads.constants import SUBJECT, get_grace_period
from apps.downloads.models import Download
from apps.media.models import Media
from apps.users.models import Role
from django.db import DatabaseError
from django.utils import timezone
from rest_framework.exceptions import NotFound

T0 = timezone.now().replace(microsecond=0) - timedelta(days=1)


def build_ability(user):
    builder = RuleBuilder()
    DownloadsAuthorizer().for_user(user, builder)
    return builder.build()


def freeze(monkeypatch, moment):
    monkeypatch.setattr(
        "apps.downloads.authorizer.timezone",
        SimpleNamespace(now=lambda: moment),
    )


# ---------- for_user ----------

@pytest.mark.django_db
@pytest.mark.parametrize(
    "extra",
    [
        {"role": Role.GUEST},
        {"revoked": True},
        {"confirmed_email": False},
    ],
)
def test_restricted_users_get_no_download_actions(make_user, extra):
    """
    Гость, отозванный и неподтверждённый пользователь не получают
    ни одного действия над Download, а правило содержит причину.
    """
    ability = build_ability(make_user(**extra))

    for action in Action.values:
        assert ability.can(action, SUBJECT) is False

    assert len(ability.rules) == 1
    rule = ability.rules[0]
    assert rule.inverted and rule.action == Action.MANAGE
    assert rule.reason


@pytest.mark.django_db
def test_regular_user_gets_read_create_update_only(regular_user):
    ability = build_ability(regular_user)

    assert [rule.action for rule in ability.rules] == [Action.READ, Action.CREATE, Action.UPDATE]
    assert ability.can(Action.READ, SUBJECT)
    assert ability.can(Action.CREATE, SUBJECT)
    assert ability.can(Action.UPDATE, SUBJECT)
    assert not ability.can(Action.DELETE, SUBJECT)
    assert not ability.can(Action.MANAGE, SUBJECT)


@pytest.mark.django_db
def test_predicates_require_ownership_and_readable_media(
    regular_user, other_user, make_view, media, private_media
):
    ability = build_ability(regular_user)

    own = Download(user=regular_user, view=make_view(regular_user, media))
    foreign = Download(user=other_user, view=make_view(other_user, media))
    hidden = Download(user=regular_user, view=make_view(regular_user, private_media))

    for action in (Action.READ, Action.CREATE, Action.UPDATE):
        assert ability.can(action, SUBJECT, own)
        assert not ability.can(action, SUBJECT, foreign)
        assert not ability.can(action, SUBJECT, hidden)


@pytest.mark.django_db
def test_read_query_matches_in_memory_check(regular_user, other_user, make_view, media, private_media):
    own = Download.objects.create(user=regular_user, view=make_view(regular_user, media))
    Download.objects.create(user=other_user, view=make_view(other_user, media))
    Download.objects.create(user=regular_user, view=make_view(regular_user, private_media))

    q = build_ability(regular_user).accessible_by(Action.READ, SUBJECT)

    assert list(Download.objects.filter(q).distinct()) == [own]


# ---------- authorize ----------

@pytest.mark.django_db
def test_socket_context_is_always_authorized(socket_context, guest_user):
    authorizer = DownloadsAuthorizer()
    context = socket_context(user=guest_user, download_id=str(uuid.uuid4()))

    assert authorizer.authorize(context, RuleBuilder().build(), []) is True


@pytest.mark.django_db
def test_route_without_download_id_is_authorized(http_context, regular_user):
    authorizer = DownloadsAuthorizer()
    context = http_context(user=regular_user, action="create")

    assert authorizer.authorize(context, build_ability(regular_user), []) is True
    assert not hasattr(context.get_request(), "download")


@pytest.mark.django_db
def test_own_download_is_attached_to_request(http_context, regular_user, download):
    context = http_context(user=regular_user, download_id=str(download.location))

    assert DownloadsAuthorizer().authorize(context, build_ability(regular_user), []) is True
    assert context.get_request().download == download


@pytest.mark.django_db
def test_grace_window_boundaries(monkeypatch, http_context, regular_user, view):
    """
    Загрузка, созданная в T0, доступна до T0 + grace (не включая).
    """
    download = Download.objects.create(user=regular_user, view=view, created_at=T0)
    ability = build_ability(regular_user)
    grace = get_grace_period()

    freeze(monkeypatch, T0 + grace - timedelta(milliseconds=1))
    context = http_context(user=regular_user, download_id=str(download.location))
    assert DownloadsAuthorizer().authorize(context, ability, []) is True
    assert context.get_request().download == download

    freeze(monkeypatch, T0 + grace)
    with pytest.raises(NotFound):
        DownloadsAuthorizer().authorize(
            http_context(user=regular_user, download_id=str(download.location)), ability, []
        )

    freeze(monkeypatch, T0 + grace + timedelta(milliseconds=1))
    context = http_context(user=regular_user, download_id=str(download.location))
    with pytest.raises(NotFound):
        DownloadsAuthorizer().authorize(context, ability, [])
    assert not hasattr(context.get_request(), "download")


@pytest.mark.django_db
def test_grace_period_follows_settings(settings, monkeypatch, http_context, regular_user, view):
    settings.DOWNLOADS_GRACE_PERIOD = timedelta(minutes=5)
    download = Download.objects.create(user=regular_user, view=view, created_at=T0)

    freeze(monkeypatch, T0 + timedelta(minutes=6))
    with pytest.raises(NotFound):
        DownloadsAuthorizer().authorize(
            http_context(user=regular_user, download_id=str(download.location)),
            build_ability(regular_user),
            [],
        )


@pytest.mark.django_db
def test_foreign_and_missing_downloads_look_the_same(http_context, other_user, download):
    """
    Чужая загрузка даёт тот же NotFound, что и несуществующая.
    """
    ability = build_ability(other_user)
    authorizer = DownloadsAuthorizer()

    with pytest.raises(NotFound) as foreign:
        authorizer.authorize(
            http_context(user=other_user, download_id=str(download.location)), ability, []
        )
    with pytest.raises(NotFound) as missing:
        authorizer.authorize(
            http_context(user=other_user, download_id=str(uuid.uuid4())), ability, []
        )

    assert str(foreign.value.detail) == str(missing.value.detail)
    assert foreign.value.status_code == missing.value.status_code


@pytest.mark.django_db
def test_download_of_hidden_media_is_not_found(http_context, regular_user, make_view, private_media):
    download = Download.objects.create(user=regular_user, view=make_view(regular_user, private_media))

    with pytest.raises(NotFound):
        DownloadsAuthorizer().authorize(
            http_context(user=regular_user, download_id=str(download.location)),
            build_ability(regular_user),
            [],
        )


@pytest.mark.django_db
def test_granted_media_makes_download_visible(http_context, regular_user, make_view, private_media):
    private_media.grants.create(user=regular_user)
    download = Download.objects.create(user=regular_user, view=make_view(regular_user, private_media))

    context = http_context(user=regular_user, download_id=str(download.location))

    assert DownloadsAuthorizer().authorize(context, build_ability(regular_user), []) is True


@pytest.mark.django_db
def test_malformed_download_id_is_not_found(http_context, regular_user):
    with pytest.raises(NotFound):
        DownloadsAuthorizer().authorize(
            http_context(user=regular_user, download_id="not-a-uuid"),
            build_ability(regular_user),
            [],
        )


@pytest.mark.django_db
def test_store_failure_is_retrieval_failure(monkeypatch, http_context, regular_user, download):
    def broken(self, download_id, ability):
        raise DatabaseError("connection lost")

    monkeypatch.setattr(DownloadsAuthorizer, "_find_download", broken)

    with pytest.raises(RetrievalFailed) as exc:
        DownloadsAuthorizer().authorize(
            http_context(user=regular_user, download_id=str(download.location)),
            build_ability(regular_user),
            [],
        )

    assert exc.value.status_code == 500
    assert exc.value.get_codes() == "retrieval_failed"


@pytest.mark.django_db
def test_public_media_download_for_unconfirmed_user_is_denied(http_context, make_user, make_view):
    user = make_user(confirmed_email=False)
    public = Media.objects.create(title="Открытое", visibility=Media.Visibility.PUBLIC)
    download = Download.objects.create(user=user, view=make_view(user, public))

    with pytest.raises(NotFound):
        DownloadsAuthorizer().authorize(
            http_context(user=user, download_id=str(download.location)),
            build_ability(user),
            [],
        )
