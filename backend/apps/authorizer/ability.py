"""
Правила доступа (can/cannot) и их свёртка в Ability.

Правило — это данные: (эффект, действие, тип ресурса, предикат, причина).
Ability запрещает всё по умолчанию; из подходящих правил решает
последнее добавленное (last match wins).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional

from django.db import models
from django.db.models import Q

from .predicates import Always, Never, Predicate

ALL_SUBJECTS = "all"


class Action(models.TextChoices):
    MANAGE = "manage", "manage"
    CREATE = "create", "create"
    READ = "read", "read"
    UPDATE = "update", "update"
    DELETE = "delete", "delete"


class Effect(models.TextChoices):
    ALLOW = "allow", "allow"
    DENY = "deny", "deny"


@dataclass(frozen=True)
class Permission:
    """Требование маршрута: действие над типом ресурса."""

    action: str
    subject: str


@dataclass(frozen=True)
class Rule:
    effect: str
    action: str
    subject: str
    predicate: Optional[Predicate] = None
    reason: str = ""

    @property
    def inverted(self) -> bool:
        return self.effect == Effect.DENY

    def applies_to(self, action: str, subject: str) -> bool:
        action_ok = self.action in (Action.MANAGE, action)
        subject_ok = self.subject in (ALL_SUBJECTS, subject)
        return action_ok and subject_ok

    def matches(self, obj: Any = None) -> bool:
        if self.predicate is None:
            return True
        # Проверка на уровне типа: условное разрешение засчитывается,
        # условный запрет — нет
        if obj is None:
            return not self.inverted
        return self.predicate.matches(obj)


class PendingRule:
    """Только что добавленное в RuleBuilder правило; через него задаётся причина."""

    def __init__(self, builder: "RuleBuilder", index: int) -> None:
        self._builder = builder
        self._index = index

    @property
    def rule(self) -> Rule:
        return self._builder.rules[self._index]

    def because(self, reason: str) -> "PendingRule":
        self._builder.rules[self._index] = replace(self.rule, reason=reason)
        return self


class RuleBuilder:
    """
    Накопитель правил, который получают authorizer'ы в for_user().

        builder.can(Action.READ, "Download", predicate)
        builder.cannot(Action.MANAGE, "Download").because("...")
    """

    def __init__(self) -> None:
        self.rules: list[Rule] = []

    def can(self, action: str, subject: str, predicate: Predicate | None = None) -> PendingRule:
        return self._add(Effect.ALLOW, action, subject, predicate)

    def cannot(self, action: str, subject: str, predicate: Predicate | None = None) -> PendingRule:
        return self._add(Effect.DENY, action, subject, predicate)

    def _add(self, effect: str, action: str, subject: str, predicate: Predicate | None) -> PendingRule:
        self.rules.append(Rule(effect=effect, action=action, subject=subject, predicate=predicate))
        return PendingRule(self, len(self.rules) - 1)

    def build(self) -> "Ability":
        return Ability(self.rules)


class Ability:
    """
    Неизменяемый набор правил актёра на время одного запроса.
    """

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def rules_for(self, action: str, subject: str) -> list[Rule]:
        """Подходящие правила, начиная с последнего добавленного."""
        return [rule for rule in reversed(self._rules) if rule.applies_to(action, subject)]

    def relevant_rule(self, action: str, subject: str, obj: Any = None) -> Rule | None:
        for rule in self.rules_for(action, subject):
            if rule.matches(obj):
                return rule
        return None

    def can(self, action: str, subject: str, obj: Any = None) -> bool:
        rule = self.relevant_rule(action, subject, obj)
        return rule is not None and not rule.inverted

    def cannot(self, action: str, subject: str, obj: Any = None) -> bool:
        return not self.can(action, subject, obj)

    def accessible_by(self, action: str, subject: str) -> Q:
        """
        Q-фильтр по объектам subject, над которыми разрешено action.

        Правила сворачиваются от старых к новым: разрешение добавляется
        через OR, условный запрет через AND NOT. Объект попадает в выборку
        ровно тогда, когда can() для него возвращает True.
        Безусловное правило обрывает просмотр: более ранние правила
        оно перекрывает целиком. Если разрешений нет — пустая выборка.
        """
        conditional: list[Rule] = []
        base: Predicate = Never()

        for rule in self.rules_for(action, subject):
            if rule.predicate is None:
                base = Never() if rule.inverted else Always()
                break
            conditional.append(rule)

        query = base.to_q()
        for rule in reversed(conditional):
            condition = rule.predicate.to_q()  # pyright: ignore[reportOptionalMemberAccess]
            if rule.inverted:
                query &= ~condition
            else:
                query |= condition
        return query
