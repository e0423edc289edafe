from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


LOG_FORMAT = "%(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def configure_logging(*, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """Configure the root logger for human-readable CLI output.

    Status lines go to stdout by default. `verbose` switches to DEBUG with
    timestamps and logger names.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=VERBOSE_FORMAT if verbose else LOG_FORMAT,
        stream=stream or sys.stdout,
        force=True,
    )
