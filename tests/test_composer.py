"""Tests for the compound search composer."""

import asyncio

from AUZY.core.repository import ARRAY_CONTAINS_ANY, EQUALS, Filter
from AUZY.search.composer import (
    SearchCriteria,
    compose_filters,
    featured,
    refine_by_name,
    search,
)

from conftest import TAG_A, TAG_B, TAG_C


def _seed(repo, *records):
    ids = []
    for record in records:
        ids.append(asyncio.run(repo.add(record)))
    return ids


class TestComposeFilters:
    """Tests for the filters pushed to the store."""

    def test_no_criteria(self):
        """Test omitted criteria produce no filters."""
        assert compose_filters(SearchCriteria()) == []

    def test_tags_become_any_match(self):
        """Test tags are pushed as a single any-match filter."""
        filters = compose_filters(SearchCriteria(tags=[TAG_A, TAG_B]))
        assert filters == [Filter('tags', ARRAY_CONTAINS_ANY, [TAG_A, TAG_B])]

    def test_city_is_lower_cased(self):
        """Test the city filter compares against the lower-cased value."""
        filters = compose_filters(SearchCriteria(city='Lusaka'))
        assert filters == [Filter('city', EQUALS, 'lusaka')]

    def test_name_is_never_pushed(self):
        """Test the name constraint stays client side."""
        assert compose_filters(SearchCriteria(name='cafe')) == []

    def test_empty_values_are_absent(self):
        """Test empty strings and empty lists are treated as omitted."""
        assert compose_filters(SearchCriteria(name='', city='', tags=[])) == []


class TestRefineByName:
    """Tests for the client-side substring step."""

    def test_case_insensitive(self):
        """Test 'cafe' and 'CAFE' both match "Joe's Cafe"."""
        docs = [('1', {'name': "Joe's Cafe"}), ('2', {'name': 'Bakery'})]
        assert refine_by_name(docs, 'cafe', 'name') == [('1', {'name': "Joe's Cafe"})]
        assert refine_by_name(docs, 'CAFE', 'name') == [('1', {'name': "Joe's Cafe"})]

    def test_non_string_field_does_not_match(self):
        """Test records without a string name are dropped."""
        docs = [('1', {'name': None}), ('2', {})]
        assert refine_by_name(docs, 'cafe', 'name') == []

    def test_no_name_keeps_everything(self):
        """Test an absent name leaves the candidates untouched."""
        docs = [('1', {'name': 'A'}), ('2', {'name': 'B'})]
        assert refine_by_name(docs, None, 'name') is docs


class TestSearch:
    """Tests for search() against an in-memory collection."""

    def test_tags_are_disjunctive(self, business_repo):
        """Test a record sharing any one of the tags matches."""
        a, b, _ = _seed(
            business_repo,
            {'name': 'A', 'city': 'lusaka', 'tags': [TAG_A]},
            {'name': 'B', 'city': 'lusaka', 'tags': [TAG_B, TAG_C]},
            {'name': 'C', 'city': 'lusaka', 'tags': [TAG_C]},
        )

        results = asyncio.run(search(business_repo, SearchCriteria(tags=[TAG_A, TAG_B])))

        assert [doc_id for doc_id, _ in results] == [a, b]

    def test_criteria_are_conjunctive(self, business_repo):
        """Test name, city and tags must all hold."""
        match, *_ = _seed(
            business_repo,
            {'name': "Joe's Cafe", 'city': 'lusaka', 'tags': [TAG_A]},
            {'name': "Joe's Cafe", 'city': 'ndola', 'tags': [TAG_A]},
            {'name': 'Bakery', 'city': 'lusaka', 'tags': [TAG_A]},
            {'name': "Ann's Cafe", 'city': 'lusaka', 'tags': [TAG_B]},
        )

        criteria = SearchCriteria(name='CAFE', city='Lusaka', tags=[TAG_A])
        results = asyncio.run(search(business_repo, criteria, name_field='name'))

        assert [doc_id for doc_id, _ in results] == [match]
        assert business_repo.queries == [[
            Filter('tags', ARRAY_CONTAINS_ANY, [TAG_A]),
            Filter('city', EQUALS, 'lusaka'),
        ]]

    def test_no_criteria_lists_everything(self, business_repo):
        """Test an empty search returns the whole collection without a query."""
        ids = _seed(business_repo, {'name': 'A'}, {'name': 'B'})

        results = asyncio.run(search(business_repo, SearchCriteria(), name_field='name'))

        assert [doc_id for doc_id, _ in results] == ids
        assert business_repo.queries == []

    def test_name_only(self, business_repo):
        """Test a name-only search filters the full listing."""
        _, cafe = _seed(business_repo, {'name': 'Bakery'}, {'name': 'Cafe Zambezi'})

        results = asyncio.run(search(business_repo, SearchCriteria(name='zam'), name_field='name'))

        assert [doc_id for doc_id, _ in results] == [cafe]

    def test_name_ignored_without_field(self, post_repo):
        """Test the name constraint needs a field to run on."""
        ids = _seed(post_repo, {'title': 'One'}, {'title': 'Two'})

        results = asyncio.run(search(post_repo, SearchCriteria(name='zzz')))

        assert [doc_id for doc_id, _ in results] == ids


def test_featured(business_repo):
    """Test featured() returns only records flagged isFeatured."""
    _, feat = _seed(business_repo, {'isFeatured': False}, {'isFeatured': True})

    results = asyncio.run(featured(business_repo))

    assert [doc_id for doc_id, _ in results] == [feat]
