"""Logging setup for the ``pyjdate`` command."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(*, level: int = logging.WARNING, force: bool = False) -> None:
    """Route log records to stderr so they never mix with command output.

    Only the CLI calls this; the library modules just create their loggers.
    ``-v`` passes ``logging.DEBUG`` to show every conversion step. A root
    logger that already has handlers is left alone unless ``force`` is set.
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=force,
    )
