"""Wall-clock timing of a block of code, written to the debug log."""

from __future__ import annotations

import logging
import time

logger = logging.getLogger(__name__)


class Profile:
    """Measure how long a block takes; use as a context manager.

    The elapsed time is logged when the block ends and whenever the timer
    is restarted.
    """

    def __init__(self, what: str = "") -> None:
        self.what = what
        self._start = time.perf_counter()

    def restart(self, what: str = "") -> None:
        """Log the time so far, then start timing ``what`` from zero."""
        self.elapsed()
        self.what = what
        self._start = time.perf_counter()

    def elapsed(self) -> int:
        """Log and return the milliseconds since the timer started."""
        ms = int((time.perf_counter() - self._start) * 1000)
        logger.debug("%s took %d ms", self.what, ms)
        return ms

    def __enter__(self) -> Profile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed()