"""Unit tests for analyzer.title_resolver module."""

import pytest

from migrate_confluence.analyzer.models import TitleFailureReason
from migrate_confluence.analyzer.title_builder import TitleBuilder
from migrate_confluence.analyzer.title_resolver import TitleResolver
from migrate_confluence.export_index.object_index import ObjectIndex
from tests.fixtures.sample_entities import entities_document, page, space

PREFIXES = {'1': '', '2': 'DOCS'}


def _resolver(*objects, title_builder=None):
    index = ObjectIndex.from_string(entities_document(space('1', 'GENERAL'), space('2', 'DOCS'), *objects))
    return index, TitleResolver(index, PREFIXES, title_builder)


class TestIsCurrentHead:
    """Test cases for TitleResolver.is_current_head method."""

    def test_current_page(self, sample_index):
        """Current pages without originalVersion are heads."""
        resolver = TitleResolver(sample_index, PREFIXES)

        assert resolver.is_current_head(sample_index.record_by_id('10', 'Page')) is True

    def test_draft_is_not_current(self, sample_index):
        """Pages with another status are skipped."""
        resolver = TitleResolver(sample_index, PREFIXES)

        assert resolver.is_current_head(sample_index.record_by_id('30', 'Page')) is False

    def test_historical_revision_is_not_head(self, sample_index):
        """Pages pointing at an original version are old revisions."""
        resolver = TitleResolver(sample_index, PREFIXES)

        assert resolver.is_current_head(sample_index.record_by_id('40', 'Page')) is False

    def test_missing_status_is_not_current(self):
        """A page without contentStatus is not current."""
        index, resolver = _resolver(page('50', 'No status', '2', content_status=None))

        assert resolver.is_current_head(index.record_by_id('50', 'Page')) is False


class TestResolve:
    """Test cases for TitleResolver.resolve method."""

    def test_root_page_in_main_namespace(self, sample_index):
        """A root page in the general space has no prefix."""
        result = TitleResolver(sample_index, PREFIXES).resolve(sample_index.record_by_id('10', 'Page'))

        assert result.succeeded
        assert result.page_id == '10'
        assert result.title == 'Home'

    def test_child_page_includes_ancestors(self, sample_index):
        """Ancestor titles are prepended root-first."""
        result = TitleResolver(sample_index, PREFIXES).resolve(sample_index.record_by_id('20', 'Page'))

        assert result.title == 'DOCS:Dokumentation/Detailed_planning'

    def test_deep_hierarchy(self):
        """Every level of the hierarchy becomes one segment."""
        index, resolver = _resolver(
            page('1', 'root', '2'),
            page('2', 'Middle part', '2', parent_id='1'),
            page('3', 'leaf [v2]', '2', parent_id='2'),
        )

        result = resolver.resolve(index.record_by_id('3', 'Page'))

        assert result.title == 'DOCS:Root/Middle_part/leaf_(v2)'

    def test_missing_ancestor(self):
        """A parent id that is not in the document fails the title."""
        index, resolver = _resolver(page('20', 'Orphan', '2', parent_id='999'))

        result = resolver.resolve(index.record_by_id('20', 'Page'))

        assert not result.succeeded
        assert result.title is None
        assert result.reason is TitleFailureReason.MISSING_ANCESTOR
        assert '999' in result.message

    def test_cyclic_hierarchy_terminates(self):
        """Pages that are their own ancestors fail instead of looping."""
        index, resolver = _resolver(
            page('1', 'A', '2', parent_id='2'),
            page('2', 'B', '2', parent_id='1'),
        )

        result = resolver.resolve(index.record_by_id('1', 'Page'))

        assert result.reason is TitleFailureReason.CYCLIC_HIERARCHY

    def test_self_parent_is_cyclic(self):
        """A page naming itself as parent is a cycle."""
        index, resolver = _resolver(page('1', 'Loop', '2', parent_id='1'))

        result = resolver.resolve(index.record_by_id('1', 'Page'))

        assert result.reason is TitleFailureReason.CYCLIC_HIERARCHY

    def test_invalid_characters_fail(self):
        """Unmappable characters are reported with their reason."""
        index, resolver = _resolver(page('1', 'a <b> c', '2'))

        result = resolver.resolve(index.record_by_id('1', 'Page'))

        assert result.reason is TitleFailureReason.INVALID_CHARACTERS
        assert result.message

    def test_invalid_ancestor_title_fails_descendants(self):
        """A bad ancestor title makes every descendant invalid."""
        index, resolver = _resolver(
            page('1', '..', '2'),
            page('2', 'Child', '2', parent_id='1'),
        )

        result = resolver.resolve(index.record_by_id('2', 'Page'))

        assert result.reason is TitleFailureReason.INVALID_SEGMENT

    def test_missing_title(self):
        """A page without a title cannot be resolved."""
        index, resolver = _resolver(page('1', None, '2'))

        result = resolver.resolve(index.record_by_id('1', 'Page'))

        assert result.reason is TitleFailureReason.MISSING_TITLE

    def test_unresolved_space(self):
        """A page whose space has no prefix fails."""
        index, resolver = _resolver(page('1', 'Elsewhere', '77'))

        result = resolver.resolve(index.record_by_id('1', 'Page'))

        assert result.reason is TitleFailureReason.UNRESOLVED_SPACE

    def test_title_too_long(self):
        """Titles longer than the builder's limit fail."""
        index, resolver = _resolver(
            page('1', 'Parent', '2'),
            page('2', 'Child', '2', parent_id='1'),
            title_builder=TitleBuilder(max_length=8),
        )

        result = resolver.resolve(index.record_by_id('2', 'Page'))

        assert result.reason is TitleFailureReason.TITLE_TOO_LONG

    @pytest.mark.parametrize('page_id', ['10', '20', '21'])
    def test_resolution_is_deterministic(self, sample_index, page_id):
        """Resolving the same page twice gives the same result."""
        resolver = TitleResolver(sample_index, PREFIXES)
        record = sample_index.record_by_id(page_id, 'Page')

        assert resolver.resolve(record) == resolver.resolve(record)


class TestSpacePrefix:
    """Test cases for TitleResolver.space_prefix method."""

    def test_known_space(self, sample_index):
        """The prefix of the page's space is returned."""
        resolver = TitleResolver(sample_index, PREFIXES)

        assert resolver.space_prefix(sample_index.record_by_id('20', 'Page')) == 'DOCS'
        assert resolver.space_prefix(sample_index.record_by_id('10', 'Page')) == ''

    def test_page_without_space(self):
        """Pages without a space reference have no prefix."""
        index, resolver = _resolver(page('1', 'Floating', None))

        assert resolver.space_prefix(index.record_by_id('1', 'Page')) is None
