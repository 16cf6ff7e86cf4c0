"""Entry point for python -m photofx."""

import sys

from .cli import parse_args
from .exceptions import PhotofxError
from .runners.headless import run_headless
from .utils.logger import setup_logging


def main(args=None) -> int:
    """Main entry point."""
    config = parse_args(args)
    setup_logging(config.logging.level, log_json=config.logging.json)
    try:
        run_headless(config)
    except PhotofxError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
