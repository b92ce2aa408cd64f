"""Space id to namespace prefix resolution."""

import logging
from typing import Dict

from migrate_confluence.export_index.object_index import ObjectIndex
from migrate_confluence.map_store.map_store import MapStore

from .models import SPACE_ID_TO_PREFIX_MAP

logger = logging.getLogger(__name__)


class SpaceResolver:
    """Maps every Space record of an export to a namespace prefix.

    The general space becomes the main namespace (empty prefix); every other
    space uses its key verbatim. A space without a key also maps to the main
    namespace, so every space id has an entry.

    Example:
        >>> resolver = SpaceResolver(index, store)
        >>> resolver.resolve()
        {'1': '', '2': 'DOCS'}
    """

    def __init__(self, index: ObjectIndex, store: MapStore, general_space_key: str = 'GENERAL'):
        self._index = index
        self._store = store
        self._general_space_key = general_space_key

    def prefix_for_key(self, space_key: str) -> str:
        """Return the namespace prefix for a space key."""
        if space_key == self._general_space_key:
            return ''
        return space_key

    def resolve(self) -> Dict[str, str]:
        """Register a prefix for every space of the document.

        Returns:
            The complete space-id-to-prefix map, including entries from earlier runs
        """
        logger.info("Finding namespaces")

        for space in self._index.records_of_type('Space'):
            space_id = self._index.id_of(space)
            space_key = (self._index.property_value('key', space) or '').strip()

            if not space_key:
                logger.warning(f"Space {space_id} has no key, using the main namespace")

            logger.info(f"- {space_key} (ID:{space_id})")
            self._store.add(SPACE_ID_TO_PREFIX_MAP, space_id, self.prefix_for_key(space_key))

        return self._store.get(SPACE_ID_TO_PREFIX_MAP)
