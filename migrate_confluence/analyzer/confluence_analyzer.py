"""Analysis of a Confluence export's metadata document.

This module provides the ConfluenceAnalyzer class that turns the object
records of an ``entities.xml`` document into the lookup tables used by the
later migration stages. Processing order matters:

    1. Spaces: namespace prefix per space
    2. Pages: target titles, revision fingerprints, body contents and the
       attachments referenced by each page
    3. Standalone attachments: attachments not registered through a page

The sweep must run last so it can skip attachments already registered
through their page.
"""

import logging
import os
from typing import Optional

from migrate_confluence.export_index.models import ObjectRecord
from migrate_confluence.export_index.object_index import ObjectIndex
from migrate_confluence.map_store.map_store import MapStore

from .attachment_resolver import AttachmentResolver
from .models import (
    BODY_CONTENTS_TO_PAGES_MAP,
    FILES,
    PAGES_IDS_TO_TITLES_MAP,
    PAGES_TITLES_MAP,
    TITLE_ATTACHMENTS,
    TITLE_INVALIDS,
    TITLE_REVISIONS,
    AnalysisSummary,
    AnalyzerConfig,
)
from .revision_fingerprint import RevisionFingerprintBuilder
from .space_resolver import SpaceResolver
from .title_builder import TitleBuilder
from .title_resolver import TitleResolver

logger = logging.getLogger(__name__)


class ConfluenceAnalyzer:
    """Builds the migration lookup tables for one export document.

    The analyzer only writes to the map store it is given. Loading the store
    before and saving it after an analysis is up to the caller.

    Example:
        >>> store = MapStore(ANALYZER_TABLES)
        >>> analyzer = ConfluenceAnalyzer(store)
        >>> summary = analyzer.analyze_file("export/entities.xml")
        >>> store.get("pages-ids-to-titles-map")
        {'10': 'Home', '20': 'DOCS:Dokumentation/Detailed_planning', ...}
    """

    def __init__(self, store: MapStore, config: Optional[AnalyzerConfig] = None):
        """Initialize the analyzer.

        Args:
            store: Map store declaring at least the analyzer tables
            config: Analyzer configuration (default AnalyzerConfig())
        """
        self._store = store
        self._config = config or AnalyzerConfig()

    def analyze_file(self, document_path: str) -> AnalysisSummary:
        """Analyze an export document on disk.

        Attachment source paths are built relative to the directory holding
        the document.

        Args:
            document_path: Path to the metadata document

        Returns:
            AnalysisSummary of what was registered

        Raises:
            DocumentLoadError: If the document cannot be read or parsed
        """
        index = ObjectIndex.from_file(document_path)
        summary = self.analyze_index(index, os.path.dirname(document_path))
        summary.document_path = document_path
        return summary

    def analyze_index(self, index: ObjectIndex, base_path: str) -> AnalysisSummary:
        """Analyze an already indexed export document.

        Args:
            index: Object index of the document
            base_path: Directory holding the document (root of the attachments tree)

        Returns:
            AnalysisSummary of what was registered
        """
        summary = AnalysisSummary()
        conflicts_before = len(self._store.conflicts)

        space_resolver = SpaceResolver(index, self._store, self._config.general_space_key)
        space_prefixes = space_resolver.resolve()
        summary.spaces = len(index.records_of_type('Space'))

        title_resolver = TitleResolver(
            index,
            space_prefixes,
            TitleBuilder(self._config.max_title_length)
        )
        attachment_resolver = AttachmentResolver(
            index,
            space_prefixes,
            base_path,
            self._config
        )
        fingerprints = RevisionFingerprintBuilder(index)

        self._analyze_pages(index, title_resolver, attachment_resolver, fingerprints, summary)
        self._sweep_attachments(index, attachment_resolver, summary)

        summary.conflicts = len(self._store.conflicts) - conflicts_before
        logger.info(
            f"Analysis finished: {summary.pages_resolved} pages, "
            f"{summary.pages_invalid} invalid titles, "
            f"{summary.page_attachments + summary.swept_files} attachments"
        )
        return summary

    def _analyze_pages(
        self,
        index: ObjectIndex,
        title_resolver: TitleResolver,
        attachment_resolver: AttachmentResolver,
        fingerprints: RevisionFingerprintBuilder,
        summary: AnalysisSummary
    ) -> None:
        logger.info("Finding pages")

        for page in index.records_of_type('Page'):
            if not title_resolver.is_current_head(page) or title_resolver.space_prefix(page) is None:
                summary.pages_skipped += 1
                continue

            page_id = index.id_of(page)
            result = title_resolver.resolve(page)
            if not result.succeeded:
                logger.info(f"- Invalid title for page {page_id}: {result.message}")
                self._store.add(TITLE_INVALIDS, page_id, result.message)
                summary.pages_invalid += 1
                continue

            target_title = result.title
            logger.info(f"- '{target_title}' (ID:{page_id})")
            summary.pages_resolved += 1

            # Link rewriting needs the bare Confluence title; the converter
            # needs the page id to know which page it is converting.
            confluence_title = index.property_value('title', page)
            self._store.add(PAGES_TITLES_MAP, confluence_title, target_title)
            self._store.add(PAGES_IDS_TO_TITLES_MAP, page_id, target_title)

            for body_content_id in fingerprints.body_content_ids(page):
                self._store.add(BODY_CONTENTS_TO_PAGES_MAP, body_content_id, page_id)

            self._store.add(TITLE_REVISIONS, target_title, fingerprints.build(page))

            summary.page_attachments += self._register_page_attachments(
                index, page, target_title, attachment_resolver
            )

    def _register_page_attachments(
        self,
        index: ObjectIndex,
        page: ObjectRecord,
        target_title: str,
        attachment_resolver: AttachmentResolver
    ) -> int:
        registered = 0
        page_id = index.id_of(page)

        for attachment_id in index.referenced_ids('attachments', page):
            attachment = index.record_by_id(attachment_id, 'Attachment')
            if attachment is None:
                logger.warning(
                    f"Page {page_id} references missing attachment {attachment_id}"
                )
                continue

            target_filename = attachment_resolver.target_filename(attachment, target_title)
            self._store.add(TITLE_ATTACHMENTS, target_title, target_filename)
            self._store.add(FILES, target_filename, attachment_resolver.source_path(attachment))
            registered += 1

        return registered

    def _sweep_attachments(
        self,
        index: ObjectIndex,
        attachment_resolver: AttachmentResolver,
        summary: AnalysisSummary
    ) -> None:
        logger.info("Finding attachments")

        for attachment in index.records_of_type('Attachment'):
            if not attachment_resolver.is_sweep_candidate(attachment):
                continue

            target_filename = attachment_resolver.target_filename(attachment)
            logger.info(f"- '{target_filename}'")
            self._store.add(FILES, target_filename, attachment_resolver.source_path(attachment))
            summary.swept_files += 1

