"""Object index over Confluence XML export documents.

This package loads the ``entities.xml`` metadata document of a Confluence
export and indexes its object records by declared type and by id.
"""

from .errors import DocumentLoadError, ExportIndexError, MigrationError
from .models import ObjectRecord
from .object_index import ObjectIndex

__all__ = [
    'DocumentLoadError',
    'ExportIndexError',
    'MigrationError',
    'ObjectIndex',
    'ObjectRecord',
]
