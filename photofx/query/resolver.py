"""Locate an effect's key in a query string and parse its value."""

import sys
from dataclasses import dataclass
from typing import Any

from .registry import EffectDefinition

# Sorts after every real offset.
NOT_FOUND = sys.maxsize


@dataclass(frozen=True)
class Match:
    """Result of resolving one effect against one query string."""

    definition: EffectDefinition
    position: int = NOT_FOUND
    argument: Any = None
    occurrences: int = 0

    @property
    def found(self) -> bool:
        return self.position != NOT_FOUND


def resolve(definition: EffectDefinition, query: str) -> Match:
    """Find the first ``<name>=<value>`` occurrence of ``definition`` in ``query``.

    The first occurrence decides both the argument and the position; later
    occurrences are only counted.

    Args:
        definition: Effect to look for.
        query: Raw parameter string, e.g. ``brightness=50&tint=ff0000``.

    Returns:
        A ``Match``; ``position`` is ``NOT_FOUND`` when the key is absent.

    Raises:
        InvalidParameter: If the first value cannot be parsed.
    """
    first = None
    occurrences = 0
    for found in definition.pattern.finditer(query):
        if first is None:
            first = found
        occurrences += 1

    if first is None:
        return Match(definition)

    value = first.group(0)[len(definition.name) + 1:]
    return Match(
        definition,
        position=first.start(),
        argument=definition.parser(value),
        occurrences=occurrences,
    )
