# file: AUZY/search/composer.py
"""
Compound search over a document collection.

Tag membership and city equality are pushed to the store as conjunctive
filters. Firestore has no substring operator, so the name constraint is
applied to the candidates after retrieval. Store iteration order is kept.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from AUZY.core.repository import (
    ARRAY_CONTAINS_ANY,
    EQUALS,
    CollectionRepository,
    Document,
    Filter,
)

logger = logging.getLogger("search.composer")

TAGS_FIELD = "tags"
CITY_FIELD = "city"
FEATURED_FIELD = "isFeatured"


@dataclass(frozen=True)
class SearchCriteria:
    name: Optional[str] = None
    city: Optional[str] = None
    tags: Optional[Sequence[str]] = None


def compose_filters(criteria: SearchCriteria) -> List[Filter]:
    filters = []
    if criteria.tags:
        # disjunction: any shared tag is a match
        filters.append(Filter(TAGS_FIELD, ARRAY_CONTAINS_ANY, list(criteria.tags)))
    if criteria.city:
        # stored city values are lower-case
        filters.append(Filter(CITY_FIELD, EQUALS, criteria.city.lower()))
    return filters


def refine_by_name(documents: List[Document], name: Optional[str], field: str) -> List[Document]:
    if not name:
        return documents
    needle = name.lower()
    return [
        (doc_id, data) for doc_id, data in documents
        if isinstance(data.get(field), str) and needle in data[field].lower()
    ]


async def search(
    repository: CollectionRepository,
    criteria: SearchCriteria,
    name_field: Optional[str] = None,
) -> List[Document]:
    """
    Run `criteria` against `repository`.

    `name_field` names the field the client-side substring test runs on
    ("name" for businesses). Without it the name constraint is not applied.
    """
    filters = compose_filters(criteria)
    logger.debug("Search on %s pushes %s", repository.name, filters)

    documents = await (repository.find(filters) if filters else repository.list_all())

    if name_field:
        documents = refine_by_name(documents, criteria.name, name_field)
    return documents


async def featured(repository: CollectionRepository) -> List[Document]:
    return await repository.find([Filter(FEATURED_FIELD, EQUALS, True)])
