"""
Ordered rule tables for rule-based text generation.

Cluster characteristics, recovery recommendations, next-session
restrictions and alerts are all expressed as ordered tables of
``(predicate, output)`` pairs rather than inline conditionals.  Each
table is a module-level list, so its rules can be inspected and tested
one by one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

C = TypeVar("C")
T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[C, T]):
    """A named predicate over a context and the output it produces."""

    name: str
    predicate: Callable[[C], bool]
    render: Callable[[C], T]

    def applies(self, context: C) -> bool:
        return self.predicate(context)


def all_matches(rules: list[Rule[C, T]], context: C) -> list[T]:
    """Outputs of every matching rule, in table order."""
    return [rule.render(context) for rule in rules if rule.applies(context)]


def first_match(rules: list[Rule[C, T]], context: C) -> Optional[T]:
    """Output of the first matching rule, or ``None``."""
    for rule in rules:
        if rule.applies(context):
            return rule.render(context)
    return None
