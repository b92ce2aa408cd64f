"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import pytest

from migrate_confluence.analyzer.models import ANALYZER_TABLES
from migrate_confluence.export_index.object_index import ObjectIndex
from migrate_confluence.map_store.map_store import MapStore
from tests.fixtures.sample_entities import SAMPLE_EXPORT


@pytest.fixture
def sample_index() -> ObjectIndex:
    """Object index over the sample export."""
    return ObjectIndex.from_string(SAMPLE_EXPORT)


@pytest.fixture
def analyzer_store() -> MapStore:
    """Empty map store declaring the analyzer tables."""
    return MapStore(ANALYZER_TABLES)
