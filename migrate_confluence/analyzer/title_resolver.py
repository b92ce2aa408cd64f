"""Hierarchical target title resolution for Confluence pages.

A page's target title is built from its own title and the titles of all its
ancestors, walked upward through the ``parent`` property, and prefixed with
the namespace of the page's space.
"""

import logging
from typing import Dict, List, Optional

from migrate_confluence.export_index.models import ObjectRecord
from migrate_confluence.export_index.object_index import ObjectIndex

from .errors import InvalidTitleError
from .models import TitleFailureReason, TitleResult
from .title_builder import TitleBuilder

logger = logging.getLogger(__name__)


class TitleResolver:
    """Resolves target titles for current pages.

    Resolution never raises for bad data: missing or cyclic ancestors and
    unmappable titles are returned as failed TitleResults so the caller can
    record a diagnostic and continue with the next page.

    Example:
        >>> resolver = TitleResolver(index, {"2": "DOCS"})
        >>> page = index.record_by_id("20", "Page")
        >>> resolver.resolve(page).title
        'DOCS:Dokumentation/Detailed_planning'
    """

    CURRENT_STATUS = 'current'

    def __init__(
        self,
        index: ObjectIndex,
        space_prefixes: Dict[str, str],
        title_builder: Optional[TitleBuilder] = None
    ):
        """Initialize the resolver.

        Args:
            index: Object index of the export document
            space_prefixes: Space id to namespace prefix map
            title_builder: Title sanitization policy (default TitleBuilder())
        """
        self._index = index
        self._space_prefixes = space_prefixes
        self._title_builder = title_builder or TitleBuilder()

    def is_current_head(self, page: ObjectRecord) -> bool:
        """Return True if the page is current and not a historical revision."""
        status = self._index.property_value('contentStatus', page)
        if status != self.CURRENT_STATUS:
            return False
        return not self._index.property_value('originalVersion', page)

    def space_prefix(self, page: ObjectRecord) -> Optional[str]:
        """Return the namespace prefix of the page's space, or None if unresolved."""
        space_id = self._index.property_value('space', page)
        if not space_id:
            return None
        return self._space_prefixes.get(space_id)

    def resolve(self, page: ObjectRecord) -> TitleResult:
        """Resolve the full target title of a page.

        Args:
            page: Page record (expected to be a current head with a resolvable space)

        Returns:
            TitleResult with the target title, or with the failure reason
            and a diagnostic message
        """
        page_id = self._index.id_of(page)
        prefix = self.space_prefix(page)
        if prefix is None:
            space_id = self._index.property_value('space', page)
            return TitleResult.failure(
                page_id,
                TitleFailureReason.UNRESOLVED_SPACE,
                f"Space {space_id} of page {page_id} has no namespace prefix"
            )

        segments = self._collect_segments(page)
        if isinstance(segments, TitleResult):
            return segments

        try:
            title = self._title_builder.build(prefix, segments)
        except InvalidTitleError as e:
            logger.debug(f"Invalid title for page {page_id}: {e.message}")
            return TitleResult.failure(page_id, e.reason, e.message)

        return TitleResult.success(page_id, title)

    def _collect_segments(self, page: ObjectRecord):
        """Walk the parent chain upward, collecting raw titles root-first.

        Returns:
            List of raw titles, or a failed TitleResult
        """
        page_id = self._index.id_of(page)
        segments: List[str] = [self._index.property_value('title', page)]
        visited = {page_id}

        current_id = page_id
        parent_id = self._index.property_value('parent', page)
        while parent_id:
            if parent_id in visited:
                logger.debug(f"Cyclic parent chain for page {page_id} at page {parent_id}")
                return TitleResult.failure(
                    page_id,
                    TitleFailureReason.CYCLIC_HIERARCHY,
                    f"Cyclic parent chain for page {page_id}: page {parent_id} "
                    f"is its own ancestor"
                )
            visited.add(parent_id)

            parent = self._index.record_by_id(parent_id, 'Page')
            if parent is None:
                return TitleResult.failure(
                    page_id,
                    TitleFailureReason.MISSING_ANCESTOR,
                    f"Could not find parent page {parent_id} of page {current_id}"
                )

            segments.insert(0, self._index.property_value('title', parent))
            current_id = parent_id
            parent_id = self._index.property_value('parent', parent)

        return segments
