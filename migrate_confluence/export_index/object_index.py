"""Type and ID index over the object records of a Confluence export.

A Confluence XML export (``entities.xml``) is a flat "hibernate-generic"
dump: every space, page, attachment and body content is an ``<object>``
element with a declared class, an ``<id>`` child, named ``<property>``
children and named ``<collection>`` children holding references to other
objects by id::

    <object class="Page" package="com.atlassian.confluence.pages">
      <id name="id">10</id>
      <property name="title"><![CDATA[Home]]></property>
      <property name="space" class="Space"><id name="id">1</id></property>
      <collection name="bodyContents" class="java.util.Collection">
        <element class="BodyContent"><id name="id">100</id></element>
      </collection>
    </object>

The index is built once, in a single pass, so that resolvers can look up
records by (type, id) without rescanning the tree.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from lxml import etree

from .errors import DocumentLoadError
from .models import ObjectRecord

logger = logging.getLogger(__name__)


class ObjectIndex:
    """Read-only index of export records by declared type and by id.

    Example:
        >>> index = ObjectIndex.from_file("export/entities.xml")
        >>> for page in index.records_of_type("Page"):
        ...     print(index.id_of(page), index.property_value("title", page))
        >>> space = index.record_by_id("1", "Space")
    """

    def __init__(self, records: List[ObjectRecord]):
        """Build the type and (type, id) indices.

        Args:
            records: Object records in document order
        """
        self._by_type: Dict[str, List[ObjectRecord]] = {}
        self._by_id: Dict[Tuple[str, str], ObjectRecord] = {}

        for record in records:
            key = (record.type_name, record.id)
            if key in self._by_id:
                logger.debug(
                    f"Duplicate {record.type_name} record with ID {record.id} "
                    f"at {record.node_path}, keeping the first one"
                )
                continue
            self._by_id[key] = record
            self._by_type.setdefault(record.type_name, []).append(record)

        logger.debug(
            f"Indexed {len(self._by_id)} records of {len(self._by_type)} types"
        )

    @classmethod
    def from_file(cls, document_path: str) -> 'ObjectIndex':
        """Parse an export document from disk and index it.

        Args:
            document_path: Path to the export document (usually entities.xml)

        Returns:
            ObjectIndex over all records of the document

        Raises:
            DocumentLoadError: If the file cannot be read or is not well-formed XML
        """
        logger.info(f"Loading export document {document_path}")
        try:
            tree = etree.parse(document_path, cls._parser())
        except etree.XMLSyntaxError as e:
            raise DocumentLoadError(document_path, f"Malformed XML: {e}")
        except OSError as e:
            raise DocumentLoadError(document_path, str(e))

        return cls(cls._collect_records(tree.getroot()))

    @classmethod
    def from_string(cls, document: Union[str, bytes]) -> 'ObjectIndex':
        """Parse an in-memory export document and index it.

        Args:
            document: XML text of the export document

        Returns:
            ObjectIndex over all records of the document

        Raises:
            DocumentLoadError: If the text is not well-formed XML
        """
        if isinstance(document, str):
            document = document.encode('utf-8')
        try:
            root = etree.fromstring(document, cls._parser())
        except etree.XMLSyntaxError as e:
            raise DocumentLoadError('<string>', f"Malformed XML: {e}")

        return cls(cls._collect_records(root))

    def records_of_type(self, type_name: str) -> List[ObjectRecord]:
        """Return all records of a declared type, in document order."""
        return list(self._by_type.get(type_name, []))

    def id_of(self, record: ObjectRecord) -> str:
        """Return the declared identifier of a record."""
        return record.id

    def property_value(self, name: str, record: ObjectRecord) -> Optional[str]:
        """Return a named scalar property of a record.

        Object references (properties holding an ``<id>``) yield the
        referenced id.

        Returns:
            The property value, or None if the record does not declare it
        """
        return record.properties.get(name)

    def referenced_ids(self, collection_name: str, record: ObjectRecord) -> List[str]:
        """Return the ids referenced by a named collection of a record.

        Returns:
            Referenced ids in document order (empty if the collection is absent)
        """
        return list(record.collections.get(collection_name, []))

    def record_by_id(self, record_id: str, type_name: str) -> Optional[ObjectRecord]:
        """Return the record of the given type with that id, or None."""
        return self._by_id.get((type_name, record_id))

    @staticmethod
    def _parser() -> etree.XMLParser:
        # Export documents of large instances exceed libxml2's default limits
        return etree.XMLParser(
            huge_tree=True,
            resolve_entities=False,
            no_network=True,
        )

    @classmethod
    def _collect_records(cls, root) -> List[ObjectRecord]:
        """Capture every top-level ``<object>`` element as an ObjectRecord."""
        tree = root.getroottree()
        records = []

        for element in root.iterchildren('object'):
            node_path = tree.getpath(element)
            type_name = element.get('class')
            record_id = cls._id_text(element)

            if not type_name or record_id is None:
                logger.debug(f"Ignoring object without class or id at {node_path}")
                continue

            properties: Dict[str, str] = {}
            collections: Dict[str, List[str]] = {}

            for child in element.iterchildren('property', 'collection'):
                name = child.get('name')
                if not name:
                    continue

                if child.tag == 'property':
                    if name not in properties:
                        properties[name] = cls._property_text(child)
                elif name not in collections:
                    collections[name] = [
                        ref_id
                        for ref_id in (
                            cls._id_text(ref) for ref in child.iterchildren('element')
                        )
                        if ref_id is not None
                    ]

            records.append(ObjectRecord(
                type_name=type_name,
                id=record_id,
                properties=properties,
                collections=collections,
                node_path=node_path,
            ))

        return records

    @staticmethod
    def _id_text(element) -> Optional[str]:
        id_element = element.find('id')
        if id_element is None:
            return None
        return (id_element.text or '').strip()

    @classmethod
    def _property_text(cls, element) -> str:
        ref_id = cls._id_text(element)
        if ref_id is not None:
            return ref_id
        return element.text or ''
