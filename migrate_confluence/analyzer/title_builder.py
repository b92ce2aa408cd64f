"""Target title building from Confluence page titles.

This module turns Confluence page titles into MediaWiki-style target titles:
one sanitized segment per page of the hierarchy, joined with "/", prefixed
with the space's namespace.
"""

import re
from typing import List

from .errors import InvalidTitleError
from .models import TitleFailureReason


class TitleBuilder:
    """Builds hierarchical target titles from raw title segments.

    Conversion rules per segment:
    - Runs of whitespace (including non-breaking spaces) and underscores → "_"
    - Leading/trailing underscores → trimmed
    - "[" and "{" → "(", "]" and "}" → ")"
    - "|", "/", ":", "#", "%", "+" → "-"
    - "<", ">", control characters, U+FFFD and "~~~" cannot be mapped and
      make the title invalid
    - "", "." and ".." are not valid segments

    The first character of the first segment is upper-cased. A non-empty
    namespace prefix is joined with ":".

    Examples:
        - ["Home"] in the main namespace → "Home"
        - ["Dokumentation", "Detailed planning"] in DOCS → "DOCS:Dokumentation/Detailed_planning"
        - ["Q&A [draft]"] → "Q&A_(draft)"
    """

    SEGMENT_SEPARATOR = '/'
    NAMESPACE_SEPARATOR = ':'

    SUBSTITUTIONS = str.maketrans({
        '[': '(',
        '{': '(',
        ']': ')',
        '}': ')',
        '|': '-',
        '/': '-',
        ':': '-',
        '#': '-',
        '%': '-',
        '+': '-',
    })

    WHITESPACE = re.compile(r'[\s_]+')
    UNMAPPABLE = re.compile(r'[<>\x00-\x1f\x7f\ufffd]|~~~')

    def __init__(self, max_length: int = 255):
        """Initialize the builder.

        Args:
            max_length: Maximum length of the segment path in UTF-8 bytes
        """
        self.max_length = max_length

    def clean_segment(self, segment: str) -> str:
        """Sanitize a single title segment.

        Args:
            segment: Raw Confluence page title

        Returns:
            The sanitized segment

        Raises:
            InvalidTitleError: If the segment is empty or cannot be mapped
        """
        if segment is None or not segment.strip():
            raise InvalidTitleError(
                segment or '',
                TitleFailureReason.MISSING_TITLE,
                "Title is empty"
            )

        cleaned = self.WHITESPACE.sub('_', segment)

        match = self.UNMAPPABLE.search(cleaned)
        if match:
            raise InvalidTitleError(
                segment,
                TitleFailureReason.INVALID_CHARACTERS,
                f"Title '{segment}' contains invalid character {match.group(0)!r}"
            )

        cleaned = cleaned.translate(self.SUBSTITUTIONS).strip('_')

        if cleaned in ('', '.', '..'):
            raise InvalidTitleError(
                segment,
                TitleFailureReason.INVALID_SEGMENT,
                f"Title '{segment}' does not produce a valid title segment"
            )

        return cleaned

    def build(self, namespace_prefix: str, segments: List[str]) -> str:
        """Build a full target title.

        Args:
            namespace_prefix: Namespace of the owning space ("" for the main namespace)
            segments: Raw titles ordered from the root page to the page itself

        Returns:
            The namespace-prefixed, slash-joined target title

        Raises:
            InvalidTitleError: If any segment is invalid or the title is too long
        """
        cleaned = [self.clean_segment(segment) for segment in segments]
        if not cleaned:
            raise InvalidTitleError(
                '',
                TitleFailureReason.MISSING_TITLE,
                "Title has no segments"
            )

        cleaned[0] = cleaned[0][0].upper() + cleaned[0][1:]
        path = self.SEGMENT_SEPARATOR.join(cleaned)

        path_length = len(path.encode('utf-8'))
        if path_length > self.max_length:
            raise InvalidTitleError(
                path,
                TitleFailureReason.TITLE_TOO_LONG,
                f"Title '{path}' is {path_length} bytes long, "
                f"the limit is {self.max_length}"
            )

        if namespace_prefix:
            return f"{namespace_prefix}{self.NAMESPACE_SEPARATOR}{path}"
        return path
