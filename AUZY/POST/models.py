from typing import Optional

from pydantic import AnyUrl, BaseModel, StrictBool

from AUZY.core.config import MAX_SEARCH_TAGS
from AUZY.utils.fields import NonEmptyStr, TagIds, Timestamp, UserId, search_tags


# ---------------------------
# Model for adding/editing posts
# ---------------------------
class Post(BaseModel):
    title: NonEmptyStr
    content: Optional[NonEmptyStr]
    tags: TagIds
    isFeatured: StrictBool
    featuredImageURL: Optional[AnyUrl]
    timestamp: Timestamp  # seconds since epoch
    authorId: UserId

    model_config = {"extra": "forbid"}


# ---------------------------
# Query parameters for /get-posts-by-tag
# ---------------------------
class PostSearchParams(BaseModel):
    tags: Optional[search_tags(MAX_SEARCH_TAGS)]

    model_config = {"extra": "forbid"}
