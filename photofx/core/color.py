"""Color values and parsing."""

import re
from dataclasses import dataclass

from PIL import ImageColor

from ..exceptions import InvalidParameter


HEX_PATTERN = re.compile(r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


@dataclass(frozen=True)
class Color:
    """RGBA color with 0-255 channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise InvalidParameter(f"Color channel out of range: {channel}")

    def normalized(self) -> tuple[float, float, float, float]:
        """Channels scaled to [0, 1]."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"


BLACK = Color(0, 0, 0)
TRANSPARENT = Color(0, 0, 0, 0)


def parse_color(text: str) -> Color:
    """Parse a color from a query value.

    Accepts hex with or without ``#`` (``f00``, ``ff0000``, ``ff000080``),
    comma separated channels (``255,0,0`` or ``255,0,0,128``) and any name
    Pillow knows (``red``, ``navy``).

    Raises:
        InvalidParameter: If ``text`` is not a recognizable color.
    """
    value = text.strip()
    if not value:
        raise InvalidParameter("Empty color value")

    if "," in value:
        parts = value.split(",")
        if len(parts) not in (3, 4):
            raise InvalidParameter(f"Expected 3 or 4 color channels, got {len(parts)}")
        try:
            channels = [int(part.strip()) for part in parts]
        except ValueError as exc:
            raise InvalidParameter(f"Non-numeric color channel in {value!r}") from exc
        return Color(*channels)

    if HEX_PATTERN.match(value):
        value = "#" + value.lstrip("#")

    try:
        rgb = ImageColor.getrgb(value)
    except ValueError as exc:
        raise InvalidParameter(f"Unknown color {value!r}") from exc
    if len(rgb) == 3:
        return Color(*rgb)
    return Color(*rgb[:4])
