import datetime
import typing

import pydantic

from prepforge.models.schemas.base import BaseSchemaModel

Difficulty = typing.Literal["easy", "medium", "hard"]
Experience = typing.Literal["entry-level", "junior", "mid-level", "senior", "lead"]
QuestionType = typing.Literal["behavioral", "technical", "situational"]

TrimmedName = typing.Annotated[str, pydantic.StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]


class QuestionItem(BaseSchemaModel):
    id: str
    question: str
    type: QuestionType
    difficulty: Difficulty
    category: str


class GenerateQuestionsRequest(BaseSchemaModel):
    job_role: TrimmedName
    company: TrimmedName
    experience: Experience = "mid-level"
    difficulty: Difficulty = "medium"
    number_of_questions: int = pydantic.Field(default=5, ge=1, le=20)
    question_type: typing.Literal["behavioral", "technical", "situational", "all"] = "all"
    user_id: int | None = None

    model_config = BaseSchemaModel.model_config.copy()
    model_config["json_schema_extra"] = {
        "examples": [
            {
                "jobRole": "Backend Engineer",
                "company": "Acme",
                "experience": "senior",
                "difficulty": "hard",
                "numberOfQuestions": 5,
                "questionType": "technical",
                "userId": 1,
            }
        ]
    }


class GeneratedQuestionsData(BaseSchemaModel):
    questions: list[QuestionItem]
    interview_id: int | None = None
    saved: bool
    offline: bool
    is_fallback: bool = False
    message: str


class InterviewStatusUpdate(BaseSchemaModel):
    user_id: int
    duration: int | None = pydantic.Field(default=None, ge=0)


class InterviewOut(BaseSchemaModel):
    id: int
    user_id: int
    job_role: str
    company: str
    experience: str
    difficulty: str
    questions: list[QuestionItem]
    feedback: dict | None = None
    status: str
    duration: int | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
