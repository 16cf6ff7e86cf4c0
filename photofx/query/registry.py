"""Registry of effects that can be selected from a query string."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from ..effects.alpha import AlphaEffect
from ..effects.base import Effect
from ..effects.brightness import BrightnessEffect
from ..effects.contrast import ContrastEffect
from ..effects.filter_effect import FilterEffect
from ..effects.saturation import SaturationEffect
from ..effects.tint import TintEffect
from ..effects.vignette import VignetteEffect
from .parsers import Parser, parse_color_value, parse_filter, parse_percent, parse_vignette

Factory = Callable[[Any, dict[str, str] | None], Effect]


def key_pattern(name: str) -> "re.Pattern[str]":
    """Pattern matching ``<name>=<value>`` up to the next ``&``."""
    return re.compile(rf"{re.escape(name)}=[^&]+")


@dataclass(frozen=True)
class EffectDefinition:
    """Immutable description of a query-selectable effect.

    Attributes:
        name: Query key.
        parser: Turns the raw value into the effect's argument.
        factory: Builds a fresh effect from an argument and settings.
        pattern: Compiled key/value pattern, derived from ``name``.
    """

    name: str
    parser: Parser
    factory: Factory
    pattern: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", key_pattern(self.name))

    def create(self, argument: Any, settings: dict[str, str] | None = None) -> Effect:
        return self.factory(argument, settings)


class EffectRegistry:
    """Ordered, read-only collection of effect definitions.

    Registration order breaks ties between effects matched at the same
    offset.
    """

    def __init__(self, definitions: Sequence[EffectDefinition]):
        names = [d.name for d in definitions]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate effect names: {sorted(duplicates)}")
        self._definitions: tuple[EffectDefinition, ...] = tuple(definitions)

    def __iter__(self) -> Iterator[EffectDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: str) -> bool:
        return any(d.name == name for d in self._definitions)

    def get(self, name: str) -> EffectDefinition:
        for definition in self._definitions:
            if definition.name == name:
                return definition
        raise KeyError(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self._definitions)


DEFAULT_DEFINITIONS = (
    EffectDefinition("alpha", parse_percent("alpha", 0, 100), AlphaEffect),
    EffectDefinition("brightness", parse_percent("brightness", -100, 100), BrightnessEffect),
    EffectDefinition("contrast", parse_percent("contrast", -100, 100), ContrastEffect),
    EffectDefinition("saturation", parse_percent("saturation", -100, 100), SaturationEffect),
    EffectDefinition("filter", parse_filter, FilterEffect),
    EffectDefinition("tint", parse_color_value("tint"), TintEffect),
    EffectDefinition("vignette", parse_vignette, VignetteEffect),
)


def default_registry() -> EffectRegistry:
    """Registry with every built-in effect."""
    return EffectRegistry(DEFAULT_DEFINITIONS)
