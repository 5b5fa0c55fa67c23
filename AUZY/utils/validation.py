"""
utils/validation.py

Structural validation for request bodies, path ids and search parameters.

`validate(kind, candidate)` answers yes/no and never raises (an unknown kind is
a no); `require()` raises a ValidationError instead so the services can bail
out before touching a store.
Validation is field-level only: it does not check that referenced tag ids exist.
"""
import logging
import re
from typing import Any, Dict, Optional

import pydantic

from AUZY.BUSINESS.models import Business, BusinessSearchParams
from AUZY.core.errors import ValidationError
from AUZY.POST.models import Post, PostSearchParams
from AUZY.search.composer import SearchCriteria
from AUZY.TAGS.models import Tag
from AUZY.USERS.models import User
from AUZY.utils.fields import COLLECTION_ID_PATTERN, USER_ID_PATTERN

logger = logging.getLogger("utils.validation")

SCHEMAS = {
    "business": Business,
    "post": Post,
    "tag": Tag,
    "user": User,
    "business-search": BusinessSearchParams,
    "post-search": PostSearchParams,
}

# kinds whose `tags` arrive as one comma separated string
_COMMA_TAG_KINDS = {"business-search", "post-search"}

_COLLECTION_ID_RE = re.compile(COLLECTION_ID_PATTERN)
_USER_ID_RE = re.compile(USER_ID_PATTERN)
# absolute path, optionally drive-prefixed, with / or \ separators
_FILE_PATH_RE = re.compile(r"^(?:[a-zA-Z]:)?[\\/](?:[^\\/]+[\\/])*[^\\/]+$")


def split_tags(candidate: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of `candidate` with a comma separated `tags` string split into a list."""
    prepared = dict(candidate)
    tags = prepared.get("tags")
    if isinstance(tags, str):
        prepared["tags"] = tags.split(",") if tags else None
    return prepared


def _errors(kind: str, candidate: Any) -> Optional[list]:
    schema = SCHEMAS.get(kind)
    if schema is None:
        raise KeyError(f"Unknown schema kind: {kind}")
    if kind in _COMMA_TAG_KINDS and isinstance(candidate, dict):
        candidate = split_tags(candidate)
    try:
        schema.model_validate(candidate)
    except pydantic.ValidationError as e:
        return [".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors()]
    return None


def validate(kind: str, candidate: Any) -> bool:
    if kind not in SCHEMAS:
        logger.warning("Unknown schema kind: %s", kind)
        return False
    return _errors(kind, candidate) is None


def require(kind: str, candidate: Any, message: str = "The request body provided is not valid or acceptable."):
    """Raise ValidationError unless `candidate` satisfies the `kind` schema."""
    errors = _errors(kind, candidate)
    if errors is not None:
        logger.warning("Rejected %s candidate, invalid fields: %s", kind, errors)
        raise ValidationError(message, kind=kind, fields=errors)


# ---------------------------
# Scalar checks
# ---------------------------
def is_collection_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_COLLECTION_ID_RE.fullmatch(value))


def is_user_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_USER_ID_RE.fullmatch(value))


def is_file_path(value: Any) -> bool:
    return isinstance(value, str) and bool(_FILE_PATH_RE.fullmatch(value))


def require_collection_id(value: Any):
    if not is_collection_id(value):
        raise ValidationError("The request parameter provided is not valid or acceptable.", id=value)


# ---------------------------
# Search parameters
# ---------------------------
_QUERY_MESSAGE = "The query parameters provided are not valid or acceptable."


def parse_business_search(name: Optional[str] = None, city: Optional[str] = None, tags: Optional[str] = None) -> SearchCriteria:
    params = {"name": name, "city": city, "tags": tags}
    require("business-search", params, _QUERY_MESSAGE)
    params = split_tags(params)
    return SearchCriteria(name=params["name"], city=params["city"], tags=params["tags"])


def parse_post_search(tags: Optional[str] = None) -> SearchCriteria:
    params = {"tags": tags}
    require("post-search", params, _QUERY_MESSAGE)
    return SearchCriteria(tags=split_tags(params)["tags"])
