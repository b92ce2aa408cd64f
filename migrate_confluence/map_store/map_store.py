"""Named relation tables accumulated across an analysis run.

The map store holds every lookup table the analyzer produces. Each table is
declared up front with a multiplicity:

- single-value tables keep the first value written for a key. Writing the
  same value again is a no-op; writing a different value is refused and
  recorded as a DataConflict.
- multi-value tables keep an ordered list of distinct values per key.

These rules make a second analysis of the same document a no-op.
"""

import logging
from typing import Any, Dict, List

from .errors import MapStoreError, UnknownTableError
from .models import DataConflict, Multiplicity

logger = logging.getLogger(__name__)


class MapStore:
    """In-memory repository of named key/value tables.

    Example:
        >>> store = MapStore({
        ...     "files": Multiplicity.SINGLE,
        ...     "title-attachments": Multiplicity.MULTI,
        ... })
        >>> store.add("title-attachments", "Home", "Home_logo.png")
        True
        >>> store.get("title-attachments")
        {'Home': ['Home_logo.png']}
    """

    def __init__(self, tables: Dict[str, Multiplicity]):
        """Initialize empty tables.

        Args:
            tables: Table names mapped to their multiplicity
        """
        self._multiplicity = dict(tables)
        self._tables: Dict[str, Dict[str, Any]] = {name: {} for name in tables}
        self._conflicts: List[DataConflict] = []

    @property
    def table_names(self) -> List[str]:
        """Declared table names, in declaration order."""
        return list(self._multiplicity)

    @property
    def conflicts(self) -> List[DataConflict]:
        """Conflicting writes refused since creation."""
        return list(self._conflicts)

    def add(self, table: str, key: str, value: Any) -> bool:
        """Add an entry to a table.

        Args:
            table: Table name
            key: Entry key
            value: Value to store (single-value) or append (multi-value)

        Returns:
            True if the table changed, False if the write was a no-op
            or a refused conflict

        Raises:
            UnknownTableError: If the table was not declared
        """
        self._check_table(table)
        entries = self._tables[table]

        if self._multiplicity[table] is Multiplicity.MULTI:
            values = entries.setdefault(key, [])
            if value in values:
                return False
            values.append(value)
            return True

        if key not in entries:
            entries[key] = value
            return True

        if entries[key] != value:
            conflict = DataConflict(table=table, key=key, kept=entries[key], rejected=value)
            self._conflicts.append(conflict)
            logger.warning(
                f"Conflicting entry in '{table}' for key '{key}': "
                f"keeping '{entries[key]}', rejecting '{value}'"
            )
        return False

    def get(self, table: str) -> Dict[str, Any]:
        """Return a copy of a table's entries.

        Raises:
            UnknownTableError: If the table was not declared
        """
        self._check_table(table)
        if self._multiplicity[table] is Multiplicity.MULTI:
            return {key: list(values) for key, values in self._tables[table].items()}
        return dict(self._tables[table])

    def load(self, table: str, entries: Dict[str, Any]) -> None:
        """Replace a table's entries with previously persisted ones.

        Args:
            table: Table name
            entries: Persisted entries (lists of values for multi-value tables)

        Raises:
            UnknownTableError: If the table was not declared
            MapStoreError: If a multi-value entry is not a list
        """
        self._check_table(table)
        loaded: Dict[str, Any] = {}
        multi = self._multiplicity[table] is Multiplicity.MULTI

        for key, value in entries.items():
            if multi:
                if not isinstance(value, list):
                    raise MapStoreError(
                        f"Entry '{key}' of multi-value table '{table}' must be a list, "
                        f"got {type(value).__name__}"
                    )
                deduplicated: List[Any] = []
                for item in value:
                    if item not in deduplicated:
                        deduplicated.append(item)
                loaded[str(key)] = deduplicated
            else:
                loaded[str(key)] = value

        self._tables[table] = loaded
        logger.debug(f"Loaded {len(loaded)} entries into '{table}'")

    def dump(self) -> Dict[str, Dict[str, Any]]:
        """Return a copy of all tables, keyed by table name."""
        return {table: self.get(table) for table in self._multiplicity}

    def _check_table(self, table: str) -> None:
        if table not in self._multiplicity:
            raise UnknownTableError(table)
