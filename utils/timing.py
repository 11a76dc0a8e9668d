"""
Performance Timing Utilities

Provides a section timer for measuring the stages of a request.
"""

import logging
import time
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SectionTiming(BaseModel):
    """
    Timing of one recorded section.

    Attributes:
        name: Name of the section
        elapsed: Time since the previous section (or the start) in seconds
    """
    name: str
    elapsed: float = Field(description="Elapsed time in seconds")


class TimeRecorder:
    """
    Context manager that records named sections of an operation.

    Each call to `record_section` logs the time spent since the previous
    section; leaving the context logs the total.

    Example:
        with TimeRecorder("CreateHybridCollection(collection=c1)") as rc:
            validate()
            rc.record_section("check validation")
    """

    def __init__(self, header: str, enabled: bool = True):
        self._header = header
        self._enabled = enabled
        self._start: Optional[float] = None
        self._last: Optional[float] = None
        self._sections: List[SectionTiming] = []
        self.total: float = 0.0

    def __enter__(self) -> "TimeRecorder":
        self._start = self._last = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.total = time.perf_counter() - self._start
        if self._enabled:
            status = "failed" if exc_type else "done"
            logger.debug(f"{self._header} {status} in {self.total*1000:.2f}ms")

    def record_section(self, name: str) -> None:
        """Record the time spent since the previous section."""
        now = time.perf_counter()
        section = SectionTiming(name=name, elapsed=now - self._last)
        self._last = now
        self._sections.append(section)
        if self._enabled:
            logger.debug(f"{self._header} {name}: {section.elapsed*1000:.2f}ms")

    @property
    def sections(self) -> List[SectionTiming]:
        """Sections recorded so far, in order."""
        return list(self._sections)
