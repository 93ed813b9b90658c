import datetime

import sqlalchemy
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped as SQLAlchemyMapped, mapped_column as sqlalchemy_mapped_column, relationship
from sqlalchemy.sql import functions as sqlalchemy_functions

from prepforge.repository.table import Base


class Answer(Base):  # type: ignore
    """One scored attempt at one question. Rows are append-only."""

    __tablename__ = "answers"

    id: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(primary_key=True, autoincrement="auto")
    user_id: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(
        sqlalchemy.ForeignKey("users.id"), nullable=False, index=True
    )
    interview_id: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(
        sqlalchemy.ForeignKey("interviews.id"), nullable=False, index=True
    )
    # Id of an entry in interviews.questions, not a foreign key
    question_id: SQLAlchemyMapped[str] = sqlalchemy_mapped_column(sqlalchemy.String(length=64), nullable=False)
    question: SQLAlchemyMapped[str] = sqlalchemy_mapped_column(sqlalchemy.Text, nullable=False)
    answer: SQLAlchemyMapped[str] = sqlalchemy_mapped_column(sqlalchemy.Text, nullable=False)

    relevance_score: SQLAlchemyMapped[float] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=False)
    clarity_score: SQLAlchemyMapped[float] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=False)
    depth_score: SQLAlchemyMapped[float] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=False)
    # Exactly one of these two is set, depending on the evaluation flavor
    communication_score: SQLAlchemyMapped[float | None] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=True)
    star_method_score: SQLAlchemyMapped[float | None] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=True)
    overall_score: SQLAlchemyMapped[float] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=False)

    strengths: SQLAlchemyMapped[list] = sqlalchemy_mapped_column(JSONB, nullable=False, default=list)
    improvements: SQLAlchemyMapped[list] = sqlalchemy_mapped_column(JSONB, nullable=False, default=list)
    example_answer: SQLAlchemyMapped[str | None] = sqlalchemy_mapped_column(sqlalchemy.Text, nullable=True)
    time_spent: SQLAlchemyMapped[int | None] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=True)
    attempt_number: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=1)
    created_at: SQLAlchemyMapped[datetime.datetime] = sqlalchemy_mapped_column(
        sqlalchemy.DateTime(timezone=True), nullable=False, server_default=sqlalchemy_functions.now()
    )

    interview = relationship("Interview", back_populates="answers")

    __table_args__ = (
        sqlalchemy.Index("ix_answers_user_interview_question", "user_id", "interview_id", "question_id"),
        sqlalchemy.CheckConstraint("overall_score >= 0 AND overall_score <= 10", name="ck_answers_overall_range"),
    )

    __mapper_args__ = {"eager_defaults": True}
