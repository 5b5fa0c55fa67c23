from pydantic import BaseModel, field_validator

from AUZY.utils.fields import NonEmptyStr, is_tag_name


# Same shape for business tags and post tags; they live in separate collections.
class Tag(BaseModel):
    name: NonEmptyStr

    model_config = {"extra": "forbid"}

    @field_validator("name")
    @classmethod
    def word_tokens(cls, v: str):
        if not is_tag_name(v):
            raise ValueError("tag name must be whitespace separated words")
        return v
