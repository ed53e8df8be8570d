"""Data models for termtop."""

from dataclasses import dataclass
from enum import Enum


class DisplayCategory(Enum):
    """Presentation tier of a formatted metric."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(slots=True, frozen=True)
class ProcessSample:
    """Immutable observation of one process."""

    pid: str
    user: str
    cpu_percent: float  # 0.0 - 100.0 * core_count
    memory_percent: float  # 0.0 - 100.0
    command: str


@dataclass(slots=True, frozen=True)
class Formatted:
    """Display text for a cell and the category it falls in.

    ``category`` is None when the input could not be interpreted and the raw
    text is shown instead.
    """

    text: str
    category: DisplayCategory | None = None
