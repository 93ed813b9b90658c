import datetime

import sqlalchemy
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped as SQLAlchemyMapped, mapped_column as sqlalchemy_mapped_column
from sqlalchemy.sql import functions as sqlalchemy_functions

from prepforge.repository.table import Base


class UserProgress(Base):  # type: ignore
    """Per-user running aggregate. Written only through the progress aggregator."""

    __tablename__ = "user_progress"

    id: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(primary_key=True, autoincrement="auto")
    user_id: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(
        sqlalchemy.ForeignKey("users.id"), nullable=False, unique=True, index=True
    )
    total_interviews: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=0)
    completed_interviews: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(
        sqlalchemy.Integer, nullable=False, default=0
    )
    total_questions_answered: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(
        sqlalchemy.Integer, nullable=False, default=0
    )
    average_score: SQLAlchemyMapped[float] = sqlalchemy_mapped_column(sqlalchemy.Float, nullable=False, default=0.0)

    behavioral_skill: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=50)
    technical_skill: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=50)
    situational_skill: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=50)
    communication_skill: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(
        sqlalchemy.Integer, nullable=False, default=50
    )

    current_streak: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=0)
    longest_streak: SQLAlchemyMapped[int] = sqlalchemy_mapped_column(sqlalchemy.Integer, nullable=False, default=0)
    last_practice_date: SQLAlchemyMapped[datetime.date | None] = sqlalchemy_mapped_column(
        sqlalchemy.Date, nullable=True
    )
    achievements: SQLAlchemyMapped[list] = sqlalchemy_mapped_column(JSONB, nullable=False, default=list)
    badges: SQLAlchemyMapped[list] = sqlalchemy_mapped_column(JSONB, nullable=False, default=list)
    updated_at: SQLAlchemyMapped[datetime.datetime] = sqlalchemy_mapped_column(
        sqlalchemy.DateTime(timezone=True),
        nullable=False,
        server_default=sqlalchemy_functions.now(),
        onupdate=sqlalchemy_functions.now(),
    )

    __table_args__ = (
        sqlalchemy.CheckConstraint("current_streak <= longest_streak", name="ck_user_progress_streak"),
    )

    __mapper_args__ = {"eager_defaults": True}
