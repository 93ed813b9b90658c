import datetime

import pydantic

from prepforge.models.schemas.base import BaseSchemaModel


class UserUpsert(BaseSchemaModel):
    email: pydantic.EmailStr
    name: str | None = pydantic.Field(default=None, max_length=128)
    google_id: str | None = pydantic.Field(default=None, max_length=128)


class UserOut(BaseSchemaModel):
    id: int
    email: str
    name: str | None = None
    image: str | None = None
    google_id: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
