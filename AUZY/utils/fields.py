# file: AUZY/utils/fields.py
"""
Constrained field types shared by the Business, Post, Tag and User schemas.

All of them are strict: bytes are not strings and tuples are not lists.
"""
import re
from typing import Annotated, List, Optional

from pydantic import Strict, conint, conlist, constr

# Firestore auto-ids are 20 alphanumerics, Firebase Auth uids are 28.
COLLECTION_ID_PATTERN = r"^[A-Za-z0-9]{20}$"
USER_ID_PATTERN = r"^[A-Za-z0-9]{28}$"
CLOCK_TIME_PATTERN = r"^[0-9]{2}:[0-9]{2}$"  # HH:MM, zero padded

NonEmptyStr = constr(strict=True, min_length=1)
CollectionId = constr(strict=True, pattern=COLLECTION_ID_PATTERN)
UserId = constr(strict=True, pattern=USER_ID_PATTERN)
ClockTime = constr(strict=True, pattern=CLOCK_TIME_PATTERN)
Timestamp = conint(strict=True, ge=0)

TagIds = Optional[Annotated[List[CollectionId], Strict()]]

# one or more word tokens separated by whitespace
_TAG_NAME_RE = re.compile(r"\w+(?:\s+\w+)*", re.ASCII)


def is_tag_name(value: str) -> bool:
    return bool(_TAG_NAME_RE.fullmatch(value))


def search_tags(max_items: int):
    return Annotated[conlist(NonEmptyStr, max_length=max_items), Strict()]
