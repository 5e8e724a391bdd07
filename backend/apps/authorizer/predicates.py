"""
Дерево предикатов для правил доступа.

Предикат описывает условие над ресурсом и его связями, не привязываясь
к конкретному хранилищу:
- to_q()     — перевод в django Q (на границе с ORM);
- matches()  — проверка уже загруженного объекта в памяти.

Пример:
    And(
        Field("user_id", user.id),
        Relation("view", Relation("video", Relation("media", media_query))),
    )
"""
from __future__ import annotations

from functools import reduce
from typing import Any, Iterable

from django.db.models import Q


class Predicate:
    def to_q(self, prefix: str = "") -> Q:
        raise NotImplementedError

    def matches(self, obj: Any) -> bool:
        raise NotImplementedError

    def __and__(self, other: "Predicate") -> "And":
        return And(self, other)

    def __or__(self, other: "Predicate") -> "Or":
        return Or(self, other)

    def __invert__(self) -> "Not":
        return Not(self)


class Always(Predicate):
    # пустой Q() в OR и NOT ведёт себя как нейтральный элемент, а не как "истина"
    def to_q(self, prefix: str = "") -> Q:
        return ~Q(pk__in=[])

    def matches(self, obj: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "Always()"


class Never(Predicate):
    # pk__in=[] даёт пустую выборку без обращения к БД
    def to_q(self, prefix: str = "") -> Q:
        return Q(pk__in=[])

    def matches(self, obj: Any) -> bool:
        return False

    def __repr__(self) -> str:
        return "Never()"


class Field(Predicate):
    """
    Сравнение поля ресурса со значением.
    Поддерживаемые lookup: "exact" и "in".
    """

    LOOKUPS = ("exact", "in")

    def __init__(self, name: str, value: Any, lookup: str = "exact") -> None:
        if lookup not in self.LOOKUPS:
            raise ValueError(f"Неподдерживаемый lookup: {lookup!r}")
        self.name = name
        self.value = tuple(value) if lookup == "in" else value
        self.lookup = lookup

    def to_q(self, prefix: str = "") -> Q:
        key = f"{prefix}{self.name}"
        if self.lookup == "in":
            key = f"{key}__in"
        return Q(**{key: self.value})

    def matches(self, obj: Any) -> bool:
        if obj is None:
            return False
        actual = getattr(obj, self.name, None)
        if self.lookup == "in":
            return actual in self.value
        return actual == self.value

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.value!r}, lookup={self.lookup!r})"


class Relation(Predicate):
    """
    Условие над связанным объектом (FK или обратная связь).

    Для связей "ко многим" достаточно одного подходящего объекта.
    Отсутствующая связь условие не выполняет.
    """

    def __init__(self, name: str, predicate: Predicate) -> None:
        self.name = name
        self.predicate = predicate

    def to_q(self, prefix: str = "") -> Q:
        path = f"{prefix}{self.name}"
        return Q(**{f"{path}__isnull": False}) & self.predicate.to_q(f"{path}__")

    def matches(self, obj: Any) -> bool:
        if obj is None:
            return False
        related = getattr(obj, self.name, None)
        if related is None:
            return False
        # менеджер связи "ко многим"
        if hasattr(related, "all") and callable(related.all):
            return any(self.predicate.matches(item) for item in related.all())
        return self.predicate.matches(related)

    def __repr__(self) -> str:
        return f"Relation({self.name!r}, {self.predicate!r})"


class _Compound(Predicate):
    operator = ""

    def __init__(self, *items: Predicate) -> None:
        self.items: tuple[Predicate, ...] = tuple(items)

    def __repr__(self) -> str:
        inner = ", ".join(repr(item) for item in self.items)
        return f"{type(self).__name__}({inner})"


class And(_Compound):
    def to_q(self, prefix: str = "") -> Q:
        if not self.items:
            return Always().to_q(prefix)
        first, *rest = self.items
        return reduce(lambda acc, item: acc & item.to_q(prefix), rest, first.to_q(prefix))

    def matches(self, obj: Any) -> bool:
        return all(item.matches(obj) for item in self.items)


class Or(_Compound):
    def to_q(self, prefix: str = "") -> Q:
        if not self.items:
            return Never().to_q(prefix)
        first, *rest = self.items
        return reduce(lambda acc, item: acc | item.to_q(prefix), rest, first.to_q(prefix))

    def matches(self, obj: Any) -> bool:
        return any(item.matches(obj) for item in self.items)


class Not(Predicate):
    def __init__(self, item: Predicate) -> None:
        self.item = item

    def to_q(self, prefix: str = "") -> Q:
        return ~self.item.to_q(prefix)

    def matches(self, obj: Any) -> bool:
        return not self.item.matches(obj)

    def __repr__(self) -> str:
        return f"Not({self.item!r})"


def any_of(predicates: Iterable[Predicate]) -> Predicate:
    items = tuple(predicates)
    if len(items) == 1:
        return items[0]
    return Or(*items)
