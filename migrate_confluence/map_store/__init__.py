"""Relation tables shared between migration stages.

This package provides the MapStore repository the analyzer writes its lookup
tables into, and WorkspaceStore, which persists those tables as YAML files in
the migration workspace between runs.
"""

from .errors import MapStoreError, MapStoreFilesystemError, UnknownTableError
from .map_store import MapStore
from .models import DataConflict, Multiplicity
from .workspace_store import WorkspaceStore

__all__ = [
    'DataConflict',
    'MapStore',
    'MapStoreError',
    'MapStoreFilesystemError',
    'Multiplicity',
    'UnknownTableError',
    'WorkspaceStore',
]
