import datetime
import typing

import pydantic

from prepforge.models.schemas.base import BaseSchemaModel


class GenerateFeedbackRequest(BaseSchemaModel):
    question: typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=5, max_length=1000)]
    answer: typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=10, max_length=5000)]
    user_id: int
    interview_id: int
    question_id: typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
    time_spent: int | None = pydantic.Field(default=None, ge=0)


class AnswerOut(BaseSchemaModel):
    id: int
    user_id: int
    interview_id: int
    question_id: str
    question: str
    answer: str
    relevance_score: float
    clarity_score: float
    depth_score: float
    communication_score: float | None = None
    star_method_score: float | None = None
    overall_score: float
    strengths: list[str] = pydantic.Field(default_factory=list)
    improvements: list[str] = pydantic.Field(default_factory=list)
    example_answer: str | None = None
    time_spent: int | None = None
    attempt_number: int
    created_at: datetime.datetime | None = None


class FeedbackData(BaseSchemaModel):
    feedback: AnswerOut
    overall_feedback: str
    suggestion: str
    is_fallback: bool
    time_score: dict[str, typing.Any] | None = None
    progress_updated: bool


class FollowUpRequest(BaseSchemaModel):
    question: typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=5, max_length=1000)]
    answer: typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)]


class FollowUpData(BaseSchemaModel):
    follow_up_question: str
