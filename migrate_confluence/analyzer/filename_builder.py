"""Target filename building for Confluence attachments.

Attachment titles are only unique per container page, so the target filename
embeds the container's target title (or, for attachments without a
container, the namespace prefix of their space).
"""

import re


class FilenameBuilder:
    """Builds flat, collision-safe target filenames for attachments.

    Conversion rules:
    - Containment path: the container title, or the namespace prefix when
      no container title is given
    - Characters \\ / : * ? " < > | # [ ] { } and control characters → "_"
    - Runs of whitespace and underscores → single "_"
    - Leading/trailing underscores → trimmed
    - Containment path and attachment title joined with "_"
    - First character upper-cased

    Examples:
        - ("diagram.png", "DOCS:Dokumentation/Detailed_planning")
          → "DOCS_Dokumentation_Detailed_planning_diagram.png"
        - ("logo.png", "", "DOCS") → "DOCS_logo.png"
        - ("my file.pdf", "") → "My_file.pdf"
    """

    INVALID_CHARACTERS = re.compile(r'[\\/:*?"<>|#\[\]{}\x00-\x1f\x7f]')
    UNDERSCORES = re.compile(r'[\s_]+')

    def build(
        self,
        filename: str,
        container_title: str = '',
        namespace_prefix: str = ''
    ) -> str:
        """Build the target filename of an attachment.

        Args:
            filename: Raw attachment title
            container_title: Target title of the page the attachment belongs to
            namespace_prefix: Namespace prefix used when there is no container title

        Returns:
            The target filename (without extension inference)
        """
        containment = container_title or namespace_prefix
        parts = [self.clean(part) for part in (containment, filename)]
        target = '_'.join(part for part in parts if part)

        if not target:
            return target
        return target[0].upper() + target[1:]

    def clean(self, text: str) -> str:
        """Sanitize one part of a filename (containment path or attachment title)."""
        if not text:
            return ''
        cleaned = self.INVALID_CHARACTERS.sub('_', text)
        return self.UNDERSCORES.sub('_', cleaned).strip('_')
