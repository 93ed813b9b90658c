import datetime
from typing import Any

import sqlalchemy

from prepforge.config.manager import settings
from prepforge.models.db.answer import Answer
from prepforge.repository.crud.base import BaseCRUDRepository

SUB_SCORE_COLUMNS = ("relevance_score", "clarity_score", "depth_score", "communication_score", "star_method_score")


def compute_overall_score(fields: dict[str, Any]) -> float:
    """Mean of the sub-scores that are present, rounded to two decimals."""
    present = [float(fields[col]) for col in SUB_SCORE_COLUMNS if fields.get(col) is not None]
    return round(sum(present) / len(present), 2) if present else 0.0


def week_bucket(timezone: str) -> sqlalchemy.ColumnElement:
    """Start of the calendar week of `created_at`, as local time in `timezone`."""
    return sqlalchemy.func.date_trunc("week", sqlalchemy.func.timezone(timezone, Answer.created_at))


class AnswerCRUDRepository(BaseCRUDRepository):
    async def count_attempts(self, *, user_id: int, interview_id: int, question_id: str) -> int:
        stmt = (
            sqlalchemy.select(sqlalchemy.func.count())
            .select_from(Answer)
            .where(Answer.user_id == user_id)
            .where(Answer.interview_id == interview_id)
            .where(Answer.question_id == question_id)
        )
        query = await self.async_session.execute(statement=stmt)
        return int(query.scalar() or 0)

    async def create_answer(self, *, fields: dict[str, Any]) -> Answer:
        """Insert a new attempt. Overall score and attempt number are derived here, never taken from the caller."""
        values = dict(fields)
        values["overall_score"] = compute_overall_score(values)
        previous = await self.count_attempts(
            user_id=values["user_id"], interview_id=values["interview_id"], question_id=values["question_id"]
        )
        values["attempt_number"] = previous + 1

        new_answer = Answer(**values)
        self.async_session.add(new_answer)
        await self.async_session.commit()
        await self.async_session.refresh(new_answer)
        return new_answer

    async def list_by_interview(self, *, interview_id: int) -> list[Answer]:
        stmt = (
            sqlalchemy.select(Answer)
            .where(Answer.interview_id == interview_id)
            .order_by(Answer.created_at.asc(), Answer.id.asc())
        )
        query = await self.async_session.execute(statement=stmt)
        return list(query.scalars().all())

    async def list_by_user(self, *, user_id: int) -> list[Answer]:
        stmt = (
            sqlalchemy.select(Answer)
            .where(Answer.user_id == user_id)
            .order_by(Answer.created_at.asc(), Answer.id.asc())
        )
        query = await self.async_session.execute(statement=stmt)
        return list(query.scalars().all())

    async def aggregate_scores(self, *, user_id: int, since: datetime.datetime | None = None) -> dict[str, Any]:
        stmt = sqlalchemy.select(
            sqlalchemy.func.avg(Answer.overall_score),
            sqlalchemy.func.avg(Answer.relevance_score),
            sqlalchemy.func.avg(Answer.clarity_score),
            sqlalchemy.func.avg(Answer.depth_score),
            sqlalchemy.func.avg(Answer.communication_score),
            sqlalchemy.func.avg(Answer.star_method_score),
            sqlalchemy.func.count(),
        ).where(Answer.user_id == user_id)
        if since is not None:
            stmt = stmt.where(Answer.created_at >= since)
        query = await self.async_session.execute(statement=stmt)
        overall, relevance, clarity, depth, communication, star_method, total = query.one()
        return {
            "overall": float(overall or 0),
            "relevance": float(relevance or 0),
            "clarity": float(clarity or 0),
            "depth": float(depth or 0),
            "communication": float(communication or 0),
            "star_method": float(star_method or 0),
            "total_answers": int(total or 0),
        }

    async def weekly_scores(
        self, *, user_id: int, since: datetime.datetime, timezone: str | None = None
    ) -> list[dict[str, Any]]:
        week = week_bucket(timezone or settings.TIMEZONE)
        stmt = (
            sqlalchemy.select(week.label("week"), sqlalchemy.func.avg(Answer.overall_score), sqlalchemy.func.count())
            .where(Answer.user_id == user_id)
            .where(Answer.created_at >= since)
            .group_by(week)
            .order_by(week)
        )
        query = await self.async_session.execute(statement=stmt)
        return [
            {"week": row[0], "avg_score": float(row[1] or 0), "count": int(row[2])}
            for row in query.all()
        ]
