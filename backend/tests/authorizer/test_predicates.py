from types import SimpleNamespace

import pytest
from apps.authorizer.predicates import (Always, And, Field, Never, Not, Or,
                                        Relation, any_of)
from apps.media.models import Media
from django.db.models import Q


class FakeManager:
    def __init__(self, items):
        self._items = items

    def all(self):
        return list(self._items)


def test_field_to_q_uses_prefix_and_lookup():
    assert Field("user_id", 5).to_q() == Q(user_id=5)
    assert Field("visibility", ["public", "auth"], lookup="in").to_q("media__") == Q(
        media__visibility__in=("public", "auth")
    )


def test_relation_chain_translates_to_nested_lookup():
    predicate = Relation("view", Relation("video", Relation("media", Field("owner_id", 7))))

    lookup = str(predicate.to_q())
    assert "view__video__media__owner_id" in lookup
    assert "view__video__media__isnull" in lookup


def test_unknown_lookup_is_rejected():
    with pytest.raises(ValueError):
        Field("title", "x", lookup="icontains")


def test_matches_follows_relations():
    media = SimpleNamespace(owner_id=7, visibility="private")
    download = SimpleNamespace(user_id=1, view=SimpleNamespace(video=SimpleNamespace(media=media)))

    predicate = And(
        Field("user_id", 1),
        Relation("view", Relation("video", Relation("media", Field("owner_id", 7)))),
    )

    assert predicate.matches(download) is True
    assert predicate.matches(SimpleNamespace(user_id=2, view=download.view)) is False


def test_missing_relation_does_not_match():
    predicate = Relation("view", Field("user_id", 1))

    assert predicate.matches(SimpleNamespace(view=None)) is False
    assert Not(predicate).matches(SimpleNamespace(view=None)) is True


def test_to_many_relation_matches_any_item():
    media = SimpleNamespace(
        grants=FakeManager([SimpleNamespace(user_id=3), SimpleNamespace(user_id=4)])
    )

    assert Relation("grants", Field("user_id", 4)).matches(media) is True
    assert Relation("grants", Field("user_id", 5)).matches(media) is False


def test_or_and_constants():
    obj = SimpleNamespace(a=1)

    assert Or(Field("a", 2), Field("a", 1)).matches(obj) is True
    assert Or().matches(obj) is False
    assert And().matches(obj) is True
    assert Always().matches(obj) is True
    assert Never().matches(obj) is False
    assert Always().to_q() != Q()


def test_any_of_unwraps_single_item():
    item = Field("a", 1)

    assert any_of([item]) is item
    assert isinstance(any_of([item, Field("b", 2)]), Or)


def test_operators_build_compound_predicates():
    obj = SimpleNamespace(a=1, b=2)

    assert (Field("a", 1) & Field("b", 2)).matches(obj) is True
    assert (Field("a", 0) | Field("b", 2)).matches(obj) is True
    assert (~Field("a", 1)).matches(obj) is False


@pytest.mark.django_db
class TestQueryAgreesWithMatches:
    """
    Выборка по to_q() совпадает с объектами, для которых matches() == True,
    в том числе когда Always/Never вложены в Or, Not и Relation.
    """

    @pytest.fixture
    def catalog(self, make_user):
        owner = make_user(email="owner@example.com")
        Media.objects.create(title="public", visibility=Media.Visibility.PUBLIC)
        Media.objects.create(title="private", owner=owner, visibility=Media.Visibility.PRIVATE)
        Media.objects.create(title="auth", owner=make_user(), visibility=Media.Visibility.AUTH)

    @pytest.mark.parametrize(
        "predicate",
        [
            Always(),
            Never(),
            And(),
            Or(),
            Or(Field("visibility", "public"), Always()),
            Or(Never(), Field("visibility", "private")),
            And(Always(), Field("visibility", "auth")),
            Not(Always()),
            Not(Never()),
            Not(Or(Field("visibility", "public"), Always())),
            Relation("owner", Always()),
            Not(Relation("owner", Always())),
            Relation("owner", Never()),
            Relation("owner", Field("email", "owner@example.com")),
            Or(Field("visibility", "public"), Relation("owner", Always())),
        ],
        ids=repr,
    )
    def test_filter_equals_in_memory_check(self, catalog, predicate):
        everything = list(Media.objects.all())

        expected = {media.title for media in everything if predicate.matches(media)}
        actual = set(Media.objects.filter(predicate.to_q()).values_list("title", flat=True))

        assert actual == expected
