"""Unit tests for export_index.object_index module."""

import pytest

from migrate_confluence.export_index.errors import DocumentLoadError, MigrationError
from migrate_confluence.export_index.object_index import ObjectIndex
from tests.fixtures.sample_entities import (
    SAMPLE_EXPORT,
    attachment,
    entities_document,
    make_object,
    page,
    space,
)


class TestRecordsOfType:
    """Test cases for ObjectIndex.records_of_type method."""

    def test_returns_records_in_document_order(self, sample_index):
        """Pages should come back in the order they appear in the document."""
        page_ids = [sample_index.id_of(p) for p in sample_index.records_of_type('Page')]

        assert page_ids == ['10', '21', '20', '30', '40']

    def test_separates_types(self, sample_index):
        """Each declared class gets its own list."""
        assert len(sample_index.records_of_type('Space')) == 2
        assert len(sample_index.records_of_type('Attachment')) == 4

    def test_unknown_type_returns_empty_list(self, sample_index):
        """Types not present in the document yield an empty list."""
        assert sample_index.records_of_type('Comment') == []

    def test_returned_list_is_a_copy(self, sample_index):
        """Mutating the returned list must not change the index."""
        pages = sample_index.records_of_type('Page')
        pages.clear()

        assert len(sample_index.records_of_type('Page')) == 5

    def test_duplicate_records_keep_first(self):
        """A second record with the same type and id is ignored."""
        index = ObjectIndex.from_string(entities_document(
            space('1', 'FIRST'),
            space('1', 'SECOND'),
        ))

        spaces = index.records_of_type('Space')
        assert len(spaces) == 1
        assert index.property_value('key', spaces[0]) == 'FIRST'

    def test_objects_without_id_are_ignored(self):
        """Objects lacking an <id> child cannot be indexed."""
        document = entities_document(
            '<object class="Page" package="x"><property name="title">No id</property></object>',
            page('10', 'Home', '1'),
        )

        index = ObjectIndex.from_string(document)

        assert [index.id_of(p) for p in index.records_of_type('Page')] == ['10']


class TestPropertyValue:
    """Test cases for ObjectIndex.property_value method."""

    def test_scalar_property(self, sample_index):
        """CDATA property values are returned as text."""
        home = sample_index.record_by_id('10', 'Page')

        assert sample_index.property_value('title', home) == 'Home'
        assert sample_index.property_value('contentStatus', home) == 'current'

    def test_reference_property_yields_referenced_id(self, sample_index):
        """Properties holding a nested <id> return that id."""
        planning = sample_index.record_by_id('20', 'Page')

        assert sample_index.property_value('space', planning) == '2'
        assert sample_index.property_value('parent', planning) == '21'

    def test_undeclared_property_is_none(self, sample_index):
        """A property the record does not declare is absent."""
        home = sample_index.record_by_id('10', 'Page')

        assert sample_index.property_value('parent', home) is None

    def test_empty_property_is_empty_string(self):
        """A declared but empty property is distinguishable from an absent one."""
        document = entities_document(
            '<object class="Page" package="x"><id name="id">1</id>'
            '<property name="title"/></object>'
        )
        index = ObjectIndex.from_string(document)
        record = index.record_by_id('1', 'Page')

        assert index.property_value('title', record) == ''

    def test_first_declaration_wins(self):
        """Repeated property names keep the first value."""
        document = entities_document(
            '<object class="Space" package="x"><id name="id">1</id>'
            '<property name="key">ONE</property>'
            '<property name="key">TWO</property></object>'
        )
        index = ObjectIndex.from_string(document)

        assert index.property_value('key', index.record_by_id('1', 'Space')) == 'ONE'


class TestReferencedIds:
    """Test cases for ObjectIndex.referenced_ids method."""

    def test_collection_ids_in_document_order(self, sample_index):
        """Collection references keep their order."""
        planning = sample_index.record_by_id('20', 'Page')

        assert sample_index.referenced_ids('bodyContents', planning) == ['200', '201']
        assert sample_index.referenced_ids('attachments', planning) == ['5']

    def test_missing_collection_returns_empty_list(self, sample_index):
        """Records without the collection yield no ids."""
        home = sample_index.record_by_id('10', 'Page')

        assert sample_index.referenced_ids('attachments', home) == []


class TestRecordById:
    """Test cases for ObjectIndex.record_by_id method."""

    def test_finds_record_by_type_and_id(self, sample_index):
        """Lookup returns the matching record."""
        record = sample_index.record_by_id('5', 'Attachment')

        assert record is not None
        assert record.type_name == 'Attachment'
        assert sample_index.property_value('title', record) == 'diagram'

    def test_same_id_different_type_is_not_found(self, sample_index):
        """Ids are only unique per type."""
        assert sample_index.record_by_id('5', 'Page') is None

    def test_unknown_id_returns_none(self, sample_index):
        """Unknown ids yield None instead of raising."""
        assert sample_index.record_by_id('999', 'Page') is None

    def test_record_keeps_node_path(self, sample_index):
        """Records remember where they came from for diagnostics."""
        record = sample_index.record_by_id('1', 'Space')

        assert record.node_path == '/hibernate-generic/object[1]'


class TestDocumentLoading:
    """Test cases for loading export documents."""

    def test_from_file(self, tmp_path):
        """Documents on disk are parsed and indexed."""
        document = tmp_path / "entities.xml"
        document.write_text(SAMPLE_EXPORT, encoding='utf-8')

        index = ObjectIndex.from_file(str(document))

        assert len(index.records_of_type('Page')) == 5

    def test_missing_file_raises_document_load_error(self, tmp_path):
        """An unreadable file is a fatal load error."""
        missing = tmp_path / "missing.xml"

        with pytest.raises(DocumentLoadError) as exc_info:
            ObjectIndex.from_file(str(missing))

        assert exc_info.value.document_path == str(missing)
        assert str(missing) in str(exc_info.value)

    def test_malformed_file_raises_document_load_error(self, tmp_path):
        """Malformed XML is a fatal load error."""
        document = tmp_path / "entities.xml"
        document.write_text("<hibernate-generic><object>", encoding='utf-8')

        with pytest.raises(DocumentLoadError) as exc_info:
            ObjectIndex.from_file(str(document))

        assert "Malformed XML" in str(exc_info.value)

    def test_malformed_string_raises_document_load_error(self):
        """Malformed in-memory documents fail the same way."""
        with pytest.raises(DocumentLoadError):
            ObjectIndex.from_string("<not-closed>")

    def test_document_load_error_is_migration_error(self):
        """Callers can catch every package error through MigrationError."""
        assert issubclass(DocumentLoadError, MigrationError)

    def test_accepts_bytes(self):
        """Byte input with an encoding declaration is accepted."""
        index = ObjectIndex.from_string(SAMPLE_EXPORT.encode('utf-8'))

        assert len(index.records_of_type('Space')) == 2

    def test_custom_object_types_are_indexed(self):
        """Types other than Space, Page and Attachment are indexed too."""
        index = ObjectIndex.from_string(entities_document(
            make_object('BodyContent', '100', {'body': '<p>Hi</p>'}),
            attachment('5', 'a.png'),
        ))

        body = index.record_by_id('100', 'BodyContent')
        assert index.property_value('body', body) == '<p>Hi</p>'
