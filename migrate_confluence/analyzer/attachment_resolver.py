"""Source paths and target filenames for Confluence attachments.

Attachment files of an export live next to the metadata document, in
``attachments/<container id>/<attachment id>/<version>``. This module derives
that source path and the flat target filename each attachment is migrated to.
"""

import logging
import os
from typing import Dict, Optional

from migrate_confluence.export_index.models import ObjectRecord
from migrate_confluence.export_index.object_index import ObjectIndex

from .filename_builder import FilenameBuilder
from .models import AnalyzerConfig

logger = logging.getLogger(__name__)


class AttachmentResolver:
    """Resolves attachment records to source paths and target filenames.

    Example:
        >>> resolver = AttachmentResolver(index, {"2": "DOCS"}, "/exports/docs")
        >>> attachment = index.record_by_id("5", "Attachment")
        >>> resolver.source_path(attachment)
        '/exports/docs/attachments/20/5/__LATEST__'
        >>> resolver.target_filename(attachment, "DOCS:Dokumentation")
        'DOCS_Dokumentation_diagram.json'
    """

    def __init__(
        self,
        index: ObjectIndex,
        space_prefixes: Dict[str, str],
        base_path: str,
        config: Optional[AnalyzerConfig] = None,
        filename_builder: Optional[FilenameBuilder] = None
    ):
        """Initialize the resolver.

        Args:
            index: Object index of the export document
            space_prefixes: Space id to namespace prefix map
            base_path: Directory holding the export document
            config: Analyzer configuration (default AnalyzerConfig())
            filename_builder: Filename policy (default FilenameBuilder())
        """
        self._index = index
        self._space_prefixes = space_prefixes
        self._base_path = base_path
        self._config = config or AnalyzerConfig()
        self._filename_builder = filename_builder or FilenameBuilder()

    def is_current(self, attachment: ObjectRecord) -> bool:
        """Return True unless the attachment is a historical version."""
        return not self._index.property_value('originalVersion', attachment)

    def is_sweep_candidate(self, attachment: ObjectRecord) -> bool:
        """Return True if the standalone sweep should register the attachment.

        Attachments with a source content were already registered through
        the page that owns them.
        """
        if not self.is_current(attachment):
            return False
        return not self._index.property_value('sourceContent', attachment)

    def source_path(self, attachment: ObjectRecord) -> str:
        """Return the storage path of the attachment's file in the export.

        The version falls back from ``attachmentVersion`` to ``version`` to
        the latest-version marker, which tells the file copying stage to pick
        the highest version found on disk.
        """
        attachment_id = self._index.id_of(attachment)

        container_id = self._first_set(attachment, 'content', 'containerContent')
        if container_id is None:
            logger.warning(
                f"Attachment {attachment_id} at {attachment.node_path} has no container"
            )
            container_id = ''

        version = self._first_set(attachment, 'attachmentVersion', 'version')
        if version is None:
            version = self._config.latest_version_marker

        return os.path.join(
            self._base_path,
            self._config.attachments_dir,
            container_id,
            attachment_id,
            version
        )

    def target_filename(self, attachment: ObjectRecord, container_title: str = '') -> str:
        """Return the flat target filename of an attachment.

        Args:
            attachment: Attachment record
            container_title: Target title of the owning page ("" when unknown)

        Returns:
            The target filename, with an extension inferred from the content
            type when the title has none
        """
        attachment_id = self._index.id_of(attachment)
        title = self._index.property_value('title', attachment)
        if not title or not title.strip():
            logger.warning(
                f"Attachment {attachment_id} at {attachment.node_path} has no title, "
                f"using its id"
            )
            title = attachment_id

        namespace_prefix = ''
        if not container_title:
            space_id = self._space_id_of(attachment)
            if space_id:
                namespace_prefix = self._space_prefixes.get(space_id, '')

        target_name = self._filename_builder.build(title, container_title, namespace_prefix)

        # Some attachments have no file extension; the content type helps for
        # some of them, but not for generic ones like "application/octet-stream".
        # Only the title counts, a dotted container title is not an extension.
        if not self.has_extension(self._filename_builder.clean(title)):
            content_type = self._index.property_value('contentType', attachment) or ''
            extension = self._extension_for(content_type)
            if extension:
                target_name = f"{target_name}.{extension}"
            else:
                logger.debug(
                    f"Could not find file extension for {title} as "
                    f"{attachment.node_path}; contentType: {content_type}"
                )

        return target_name

    def has_extension(self, filename: str) -> bool:
        """Return True if the filename ends in a plausible file extension.

        Suffixes longer than max_extension_length are parts of the name,
        as in "02.1_Some-Workflow_File".
        """
        _, dot, extension = filename.rpartition('.')
        if not dot or not extension:
            return False
        return len(extension) <= self._config.max_extension_length

    def _extension_for(self, content_type: str) -> Optional[str]:
        media_type = content_type.split(';', 1)[0].strip().lower()
        return self._config.content_type_extensions.get(media_type)

    def _first_set(self, attachment: ObjectRecord, *names: str) -> Optional[str]:
        for name in names:
            value = self._index.property_value(name, attachment)
            if value and value.strip():
                return value.strip()
        return None

    def _space_id_of(self, attachment: ObjectRecord) -> Optional[str]:
        """Return the attachment's space, or the space of the page holding it."""
        space_id = self._first_set(attachment, 'space')
        if space_id is not None:
            return space_id

        container_id = self._first_set(attachment, 'content', 'containerContent')
        if container_id is None:
            return None
        container = self._index.record_by_id(container_id, 'Page')
        if container is None:
            return None
        return self._first_set(container, 'space')
