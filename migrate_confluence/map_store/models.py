"""Data models for the map store.

All models use dataclasses and enums for clean, type-safe data structures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Multiplicity(Enum):
    """How many values a table keeps per key.

    - SINGLE: one value per key, the first write wins
    - MULTI: an ordered list of distinct values per key, appended in order
    """
    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class DataConflict:
    """A rejected write to a single-value table.

    Recorded when a key already holds a different value. The first value
    is kept; the conflict is kept for reporting.

    Attributes:
        table: Table name
        key: Key that was written twice
        kept: Value already stored (and kept)
        rejected: Value of the rejected write

    Example:
        >>> conflict = DataConflict(
        ...     table="pages-titles-map",
        ...     key="Home",
        ...     kept="Home",
        ...     rejected="DOCS:Home"
        ... )
    """
    table: str
    key: str
    kept: Any
    rejected: Any
