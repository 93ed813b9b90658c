import sqlalchemy

from prepforge.models.db.interview import Interview
from prepforge.repository.crud.base import BaseCRUDRepository
from prepforge.utilities.exceptions.database import EntityDoesNotExist


class InterviewCRUDRepository(BaseCRUDRepository):
    async def create_interview(
        self,
        *,
        user_id: int,
        job_role: str,
        company: str,
        experience: str,
        difficulty: str,
        questions: list[dict],
    ) -> Interview:
        new_interview = Interview(
            user_id=user_id,
            job_role=job_role,
            company=company,
            experience=experience,
            difficulty=difficulty,
            questions=questions,
            status="in_progress",
        )
        self.async_session.add(new_interview)
        await self.async_session.commit()
        await self.async_session.refresh(new_interview)
        return new_interview

    async def get_by_id(self, *, interview_id: int) -> Interview | None:
        stmt = sqlalchemy.select(Interview).where(Interview.id == interview_id)
        query = await self.async_session.execute(statement=stmt)
        return query.scalar()  # type: ignore

    async def get_by_id_and_user(self, *, interview_id: int, user_id: int) -> Interview | None:
        stmt = (
            sqlalchemy.select(Interview)
            .where(Interview.id == interview_id)
            .where(Interview.user_id == user_id)
        )
        query = await self.async_session.execute(statement=stmt)
        return query.scalar()  # type: ignore

    async def get_user_interviews(self, *, user_id: int) -> list[Interview]:
        stmt = (
            sqlalchemy.select(Interview)
            .where(Interview.user_id == user_id)
            .order_by(Interview.created_at.desc(), Interview.id.desc())
        )
        query = await self.async_session.execute(statement=stmt)
        return list(query.scalars().all())

    async def list_user_interviews_page(self, *, user_id: int, page: int, limit: int) -> tuple[list[Interview], int]:
        """Return one page of the user's interviews (newest first) and the user's total interview count."""
        stmt = (
            sqlalchemy.select(Interview)
            .where(Interview.user_id == user_id)
            .order_by(Interview.created_at.desc(), Interview.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        query = await self.async_session.execute(statement=stmt)
        interviews = list(query.scalars().all())

        count_stmt = sqlalchemy.select(sqlalchemy.func.count()).select_from(Interview).where(Interview.user_id == user_id)
        count_query = await self.async_session.execute(statement=count_stmt)
        return interviews, int(count_query.scalar() or 0)

    async def update_status(self, *, interview_id: int, status: str, duration: int | None = None) -> Interview:
        interview = await self.get_by_id(interview_id=interview_id)
        if not interview:
            raise EntityDoesNotExist("Interview does not exist!")
        interview.status = status
        if duration is not None:
            interview.duration = duration
        await self.async_session.commit()
        await self.async_session.refresh(interview)
        return interview
