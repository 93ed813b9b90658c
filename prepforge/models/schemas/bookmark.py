import datetime
import typing

import pydantic

from prepforge.models.schemas.base import BaseSchemaModel


class SaveQuestionSetRequest(BaseSchemaModel):
    user_id: int
    title: typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    questions: list[dict[str, typing.Any]] = pydantic.Field(min_length=1)
    description: str | None = pydantic.Field(default=None, max_length=2000)
    tags: list[typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]] = []
    interview_id: int | None = None


class QuestionSetOwner(BaseSchemaModel):
    user_id: int


class QuestionSetOut(BaseSchemaModel):
    id: int
    user_id: int
    interview_id: int | None = None
    title: str
    description: str | None = None
    questions: list[dict[str, typing.Any]]
    tags: list[str] = []
    is_favorite: bool
    practice_count: int
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


class QuestionSetListData(BaseSchemaModel):
    items: list[QuestionSetOut]
    count: int


class TagListData(BaseSchemaModel):
    tags: list[str]


class DeletedData(BaseSchemaModel):
    deleted: bool = True
