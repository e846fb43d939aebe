"""Request body and query schemas."""

from __future__ import annotations

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"
PHONE_PATTERN = r"^[0-9+()\- ]{7,20}$"

Email = Annotated[str, StringConstraints(strip_whitespace=True, pattern=EMAIL_PATTERN)]
Password = Annotated[str, StringConstraints(min_length=4)]
ContactName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=30)]
Phone = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PHONE_PATTERN)]


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class UserCredentials(_Body):
    email: Email
    password: Password


class SubscriptionUpdate(_Body):
    subscription: Literal["starter", "pro", "business"]


class EmailOnly(_Body):
    email: Email


class ContactCreate(_Body):
    name: ContactName
    email: Email
    phone: Phone
    favorite: bool = False


class ContactUpdate(_Body):
    name: Optional[ContactName] = None
    email: Optional[Email] = None
    phone: Optional[Phone] = None
    favorite: Optional[bool] = None


class FavoriteUpdate(_Body):
    favorite: bool


class ContactListQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    favorite: Optional[bool] = None
