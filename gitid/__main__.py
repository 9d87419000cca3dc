"""Main entry point for direct module execution."""

import logging
import sys

from .cli import cli
from .config import config_dir
from .exceptions import GitidError
from .ui_common import print_error

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging() -> None:
    """Log warnings to stderr and everything from INFO up to gitid.log."""
    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.WARNING)
    handlers.append(stream_handler)

    log_dir = config_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / 'gitid.log'))
    except OSError as e:
        print(f"gitid: file logging disabled: {e}", file=sys.stderr)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, handlers=handlers)


def main() -> None:
    """Main entry point."""
    setup_logging()
    try:
        logger.debug("Starting gitid")
        cli()
    except GitidError as e:
        print_error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error("Fatal error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
