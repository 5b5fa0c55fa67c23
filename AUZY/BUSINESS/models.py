from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import AnyUrl, BaseModel, EmailStr, Strict, StrictBool, StrictStr, field_validator

from AUZY.core.config import MAX_SEARCH_TAGS
from AUZY.utils.fields import ClockTime, NonEmptyStr, TagIds, search_tags

DAYS_OF_WEEK = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)


# ---------------------------
# Opening hours for a single day
# ---------------------------
class TimeTableDay(BaseModel):
    day: Literal[DAYS_OF_WEEK]
    isOpen: StrictBool
    commence: Optional[ClockTime]
    finish: Optional[ClockTime]

    model_config = {"extra": "forbid"}


# ---------------------------
# Model for adding/editing businesses
# ---------------------------
class Business(BaseModel):
    name: NonEmptyStr
    description: Optional[NonEmptyStr]
    tags: TagIds
    phoneNumber: Optional[NonEmptyStr]
    phoneNumberSecondary: Optional[NonEmptyStr]
    email: Optional[EmailStr]
    website: Optional[AnyUrl]
    address: Optional[NonEmptyStr]
    city: Optional[NonEmptyStr]
    isFeatured: StrictBool
    timeTable: Annotated[List[TimeTableDay], Strict()]
    appointments: Dict[str, Any]
    featuredImageURL: Optional[AnyUrl]

    model_config = {"extra": "forbid"}

    @field_validator("timeTable")
    @classmethod
    def unique_days(cls, days: List[TimeTableDay]):
        seen = set()
        for entry in days:
            if entry.day in seen:
                raise ValueError(f"duplicate timetable entry for {entry.day}")
            seen.add(entry.day)
        return days


# ---------------------------
# Query parameters for /get-matching-businesses
# ---------------------------
class BusinessSearchParams(BaseModel):
    name: Optional[StrictStr]
    city: Optional[StrictStr]
    tags: Optional[search_tags(MAX_SEARCH_TAGS)]

    model_config = {"extra": "forbid"}
