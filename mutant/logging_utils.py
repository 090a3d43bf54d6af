"""
Logging helpers for mutant.

Logging is configured once per process from the run configuration;
--debug switches the root logger to DEBUG, otherwise only warnings and
errors are shown.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool, stream: Optional[TextIO] = None) -> None:
    """
    Configure the root logger for a mutant run.

    Log records go to stderr by default so they never interleave with
    reporter output on stdout.
    """

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=stream if stream is not None else sys.stderr,
    )
