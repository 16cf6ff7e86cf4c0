import pytest

from photofx.core.color import Color, parse_color
from photofx.exceptions import InvalidParameter


@pytest.mark.parametrize(
    "text, expected",
    [
        ("ff0000", Color(255, 0, 0)),
        ("#ff0000", Color(255, 0, 0)),
        ("f00", Color(255, 0, 0)),
        ("ff000080", Color(255, 0, 0, 128)),
        ("255,0,0", Color(255, 0, 0)),
        ("0, 128, 255, 64", Color(0, 128, 255, 64)),
        ("navy", Color(0, 0, 128)),
        ("Red", Color(255, 0, 0)),
    ],
)
def test_parse_color_formats(text, expected):
    assert parse_color(text) == expected


@pytest.mark.parametrize("text", ["", "notacolor", "300,0,0", "1,2", "a,b,c", "ff00"])
def test_parse_color_rejects_malformed(text):
    with pytest.raises(InvalidParameter):
        parse_color(text)


def test_color_normalized():
    assert Color(255, 0, 51, 255).normalized() == (1.0, 0.0, 0.2, 1.0)
    assert Color(255, 153, 102, 70).to_hex() == "#ff996646"
