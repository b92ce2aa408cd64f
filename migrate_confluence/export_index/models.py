"""Data models for the export object index.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class ObjectRecord:
    """One ``<object>`` record of a Confluence export document.

    The record is captured once when the index is built, so lookups never
    touch the XML tree again.

    Attributes:
        type_name: Declared object class (e.g., "Space", "Page", "Attachment")
        id: Declared identifier (text of the ``<id>`` child)
        properties: Scalar property values by name; object references are
                    stored as the referenced id
        collections: Referenced ids per collection name, in document order
        node_path: XPath of the source element, for diagnostics

    Example:
        >>> record = ObjectRecord(
        ...     type_name="Page",
        ...     id="10",
        ...     properties={"title": "Home", "space": "1"},
        ...     collections={"bodyContents": ["100"]},
        ... )
    """
    type_name: str
    id: str
    properties: Dict[str, str] = field(default_factory=dict)
    collections: Dict[str, List[str]] = field(default_factory=dict)
    node_path: str = ""
