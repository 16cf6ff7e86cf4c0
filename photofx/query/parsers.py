"""Parsers turning raw query values into typed effect arguments."""

import re
from typing import Callable

from ..core.color import BLACK, Color, parse_color
from ..effects.filter_effect import FilterMode
from ..exceptions import InvalidParameter

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

Parser = Callable[[str], object]


def parse_percent(effect: str, low: int, high: int) -> Parser:
    """Build a parser accepting integers in ``[low, high]``."""

    def parse(value: str) -> int:
        text = value.strip()
        if not INTEGER_PATTERN.match(text):
            raise InvalidParameter("Expected an integer", effect=effect, value=value)
        number = int(text)
        if not low <= number <= high:
            raise InvalidParameter(f"Expected a value between {low} and {high}", effect=effect, value=value)
        return number

    return parse


def parse_color_value(effect: str) -> Parser:
    """Build a color parser.

    Only the text after the last ``=`` is read, so a repeated key such as
    ``tint=tint=red`` still yields red.
    """

    def parse(value: str) -> Color:
        text = value.rsplit("=", 1)[-1]
        try:
            return parse_color(text)
        except InvalidParameter as exc:
            raise InvalidParameter(exc.message, effect=effect, value=value) from exc

    return parse


def parse_vignette(value: str) -> Color:
    """``true`` selects a black vignette; anything else must be a color."""
    if value.rsplit("=", 1)[-1].strip().lower() == "true":
        return BLACK
    return parse_color_value("vignette")(value)


def parse_filter(value: str) -> FilterMode:
    return FilterMode.from_token(value.rsplit("=", 1)[-1])
