"""Command-line interface for photofx."""

import argparse
from pathlib import Path

from . import __version__
from .config import ProcessingConfig
from .core.io import is_image_file
from .effects.filter_effect import FilterMode
from .query.registry import default_registry

EPILOG = """\
Examples:
  photofx photo.jpg -q "brightness=20&filter=polaroid" -o out/
  photofx a.png b.png -q "tint=ff9966&vignette=true" -o out/ --suffix .jpg
  photofx photo.jpg -q "filter=lomograph" --set filter.vignette-color=navy -o out/

Effects are applied in the order their keys first appear in the query.

Filters:
  {filters}
"""


def parse_settings(values: list[str], parser: argparse.ArgumentParser) -> dict[str, dict[str, str]]:
    """Turn ``effect.key=value`` strings into a nested settings mapping."""
    names = default_registry().names
    settings: dict[str, dict[str, str]] = {}
    for item in values:
        target, sep, value = item.partition("=")
        effect, dot, key = target.partition(".")
        if not sep or not dot or not effect or not key:
            parser.error(f"--set expects effect.key=value, got {item!r}")
        if effect not in names:
            parser.error(f"--set names unknown effect {effect!r}")
        settings.setdefault(effect, {})[key] = value
    return settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photofx",
        description="Apply query-string driven color effects to images.",
        epilog=EPILOG.format(filters=", ".join(mode.value for mode in FilterMode)),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "inputs",
        nargs="+",
        type=str,
        help="Input image files (.jpg, .png, ...)",
    )

    parser.add_argument(
        "-q", "--query",
        type=str,
        required=True,
        help="Effect parameters, e.g. 'brightness=50&tint=ff0000'",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=".",
        help="Output directory (default: current directory)",
    )

    parser.add_argument(
        "--suffix",
        type=str,
        default=".png",
        help="Output file suffix, selects the format (default: .png)",
    )

    parser.add_argument(
        "--quality",
        type=int,
        default=90,
        help="JPEG/WebP quality, 1-100 (default: 90)",
    )

    parser.add_argument(
        "--max-dimension",
        type=int,
        default=0,
        help="Scale images down to this max width/height before processing; 0 disables (default: 0)",
    )

    parser.add_argument(
        "--set",
        dest="settings",
        action="append",
        default=[],
        metavar="EFFECT.KEY=VALUE",
        help="Per-effect setting, may be repeated (e.g. filter.vignette-color=navy)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    return parser


def parse_args(args=None) -> ProcessingConfig:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv).

    Returns:
        ProcessingConfig with parsed options.
    """
    parser = build_parser()
    parsed = parser.parse_args(args)

    # Validate inputs exist
    for path in parsed.inputs:
        if not Path(path).exists():
            parser.error(f"Input file not found: {path}")
        if not is_image_file(path):
            parser.error(f"Unsupported image type: {path}")
    if not 1 <= parsed.quality <= 100:
        parser.error("--quality must be between 1 and 100")
    if not is_image_file("output" + parsed.suffix):
        parser.error(f"Unsupported output suffix: {parsed.suffix}")

    return ProcessingConfig.from_args(
        input_paths=parsed.inputs,
        query=parsed.query,
        output_dir=parsed.output,
        suffix=parsed.suffix,
        quality=parsed.quality,
        max_dimension=parsed.max_dimension,
        settings=parse_settings(parsed.settings, parser),
        log_level=parsed.log_level,
        log_json=parsed.log_json,
    )
