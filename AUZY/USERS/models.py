from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    StrictFloat,
)
from typing import Literal, Optional

from AUZY.utils.fields import NonEmptyStr


# ---------------------------
# User profile (owned by the identity service, validated here for completeness)
# ---------------------------
class User(BaseModel):
    model_config = ConfigDict(extra="forbid")  # 🚫 forbid unexpected fields

    email: EmailStr
    password: NonEmptyStr = None
    firstName: NonEmptyStr
    lastName: Optional[NonEmptyStr]
    phoneNumber: Optional[NonEmptyStr]
    street: Optional[NonEmptyStr]
    city: Optional[NonEmptyStr]
    zipCode: Optional[StrictFloat]
    country: Optional[NonEmptyStr]
    photoURL: Optional[AnyUrl]
    role: Literal["administrator", "user"] = None
