"""YAML persistence of map store tables in a migration workspace.

Each table is stored in its own file, ``<workspace>/<table>.yaml``, so later
migration stages can load only the tables they need.

Table file structure (single-value table):
    "98305": DOCS
    "98306": ""

Table file structure (multi-value table):
    DOCS:Dokumentation:
      - DOCS_Dokumentation_diagram.json
"""

import logging
import os
from typing import Any, Dict

import yaml

from .errors import MapStoreError, MapStoreFilesystemError
from .map_store import MapStore

logger = logging.getLogger(__name__)


class WorkspaceStore:
    """Loads and saves MapStore tables in a workspace directory.

    A missing table file is treated as an empty table (first run).

    Example:
        >>> workspace = WorkspaceStore(".migration-workspace")
        >>> workspace.load_into(store)
        >>> # ... analyze ...
        >>> workspace.save(store)
    """

    FILE_EXTENSION = '.yaml'

    def __init__(self, workspace_dir: str):
        """Initialize with the workspace directory.

        Args:
            workspace_dir: Directory holding one YAML file per table
        """
        self.workspace_dir = workspace_dir

    def table_path(self, table: str) -> str:
        """Return the file path of a table."""
        return os.path.join(self.workspace_dir, f"{table}{self.FILE_EXTENSION}")

    def load_into(self, store: MapStore) -> None:
        """Load every declared table of the store from the workspace.

        Args:
            store: MapStore whose tables are replaced by the persisted ones

        Raises:
            MapStoreFilesystemError: If a table file cannot be read
            MapStoreError: If a table file is malformed
        """
        for table in store.table_names:
            store.load(table, self._read_table(table))

    def save(self, store: MapStore) -> None:
        """Write every table of the store to the workspace.

        Args:
            store: MapStore to persist

        Raises:
            MapStoreFilesystemError: If the workspace or a table file cannot be written
        """
        try:
            os.makedirs(self.workspace_dir, exist_ok=True)
        except OSError as e:
            raise MapStoreFilesystemError(
                self.workspace_dir,
                'create_directory',
                str(e)
            )

        for table, entries in store.dump().items():
            self._write_table(table, entries)

        logger.info(f"Saved {len(store.table_names)} tables to {self.workspace_dir}")

    def _read_table(self, table: str) -> Dict[str, Any]:
        table_path = self.table_path(table)

        try:
            with open(table_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except PermissionError:
            raise MapStoreFilesystemError(
                table_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise MapStoreFilesystemError(
                table_path,
                'read',
                str(e)
            )

        try:
            entries = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MapStoreError(
                f"Invalid YAML syntax in {table_path}: {str(e)}"
            )

        if entries is None:
            return {}

        if not isinstance(entries, dict):
            raise MapStoreError(
                f"Table file {table_path} must contain a YAML dictionary, "
                f"got {type(entries).__name__}"
            )

        return entries

    def _write_table(self, table: str, entries: Dict[str, Any]) -> None:
        table_path = self.table_path(table)

        yaml_str = yaml.safe_dump(
            entries,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        try:
            with open(table_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise MapStoreFilesystemError(
                table_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise MapStoreFilesystemError(
                table_path,
                'write',
                str(e)
            )
