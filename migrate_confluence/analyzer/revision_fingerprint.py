"""Change fingerprints for Confluence pages.

A fingerprint combines the page's body content ids, its version number and
its last modification time::

    100/101@3-20210301100000

Identical inputs always give an identical fingerprint, so later migration
stages can skip pages whose fingerprint did not change since the last run.
"""

import logging
from datetime import datetime, UTC
from typing import List

from migrate_confluence.export_index.models import ObjectRecord
from migrate_confluence.export_index.object_index import ObjectIndex

logger = logging.getLogger(__name__)


class RevisionFingerprintBuilder:
    """Builds revision fingerprints for page records.

    Example:
        >>> builder = RevisionFingerprintBuilder(index)
        >>> builder.build(index.record_by_id("10", "Page"))
        '100@2-20210301100000'
    """

    TIMESTAMP_FORMAT = '%Y%m%d%H%M%S'

    # Used when a page has no usable modification date
    EPOCH_TIMESTAMP = '19700101000000'

    def __init__(self, index: ObjectIndex):
        self._index = index

    def body_content_ids(self, page: ObjectRecord) -> List[str]:
        """Return the page's body content ids in document order."""
        return self._index.referenced_ids('bodyContents', page)

    def revision_timestamp(self, page: ObjectRecord) -> str:
        """Return the last modification time as a UTC YYYYMMDDHHMMSS timestamp.

        Accepts ISO 8601 values ("2021-03-01T10:00:00Z") and the export's
        own format ("2021-03-01 10:00:00.000"). Values without a timezone
        are taken as UTC.
        """
        raw = self._index.property_value('lastModificationDate', page)
        page_id = self._index.id_of(page)

        if not raw or not raw.strip():
            logger.warning(f"Page {page_id} has no lastModificationDate")
            return self.EPOCH_TIMESTAMP

        try:
            modified = datetime.fromisoformat(raw.strip())
        except ValueError:
            logger.warning(
                f"Page {page_id} has an unparseable lastModificationDate '{raw}'"
            )
            return self.EPOCH_TIMESTAMP

        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=UTC)
        return modified.astimezone(UTC).strftime(self.TIMESTAMP_FORMAT)

    def build(self, page: ObjectRecord) -> str:
        """Build the fingerprint of a page.

        Returns:
            "<body ids joined by '/'>@<version>-<timestamp>"
        """
        body_ids = '/'.join(self.body_content_ids(page))
        version = (self._index.property_value('version', page) or '').strip()
        return f"{body_ids}@{version}-{self.revision_timestamp(page)}"
