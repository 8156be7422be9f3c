"""Logging setup for the report stream."""

import logging
import sys


def setup_logging(verbose: bool = False) -> None:
    formatter = logging.Formatter(
        "%(asctime)s %(message)s",
        "%Y/%m/%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[handler],
        force=True,
    )

    # urllib3 connection chatter is only useful when debugging the HTTP layer
    logging.getLogger("urllib3").setLevel(logging.INFO if verbose else logging.WARNING)
