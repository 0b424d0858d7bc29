import logging
import sys

DEBUG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(debug: bool = False, quiet: bool = False) -> None:
    """Send records to stderr. Info records carry the normal feedback, so
    quiet mode raises the level to WARNING."""
    if debug:
        level = logging.DEBUG
        fmt = DEBUG_FORMAT
    elif quiet:
        level = logging.WARNING
        fmt = "%(message)s"
    else:
        level = logging.INFO
        fmt = "%(message)s"

    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    logging.getLogger("asyncio").setLevel(logging.WARNING)
