from typing import Any

import sqlalchemy
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.sql import functions as sqlalchemy_functions

from prepforge.models.db.user_progress import UserProgress
from prepforge.repository.crud.base import BaseCRUDRepository


class UserProgressCRUDRepository(BaseCRUDRepository):
    async def get_by_user(self, *, user_id: int) -> UserProgress | None:
        stmt = (
            sqlalchemy.select(UserProgress)
            .where(UserProgress.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        query = await self.async_session.execute(statement=stmt)
        return query.scalar()  # type: ignore

    async def insert_if_absent(self, *, values: dict[str, Any]) -> bool:
        """Create the user's row. Returns False when another writer created it first."""
        stmt = (
            pg_insert(UserProgress)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[UserProgress.user_id])
            .returning(UserProgress.id)
        )
        result = await self.async_session.execute(stmt)
        inserted = result.scalar() is not None
        await self.async_session.commit()
        return inserted

    async def compare_and_set(
        self,
        *,
        user_id: int,
        expected_total_questions: int,
        expected_total_interviews: int,
        expected_completed_interviews: int,
        values: dict[str, Any],
    ) -> bool:
        """Apply `values` only if the counters still hold the values they were read with."""
        updates = {key: value for key, value in values.items() if key != "user_id"}
        stmt = (
            sqlalchemy.update(UserProgress)
            .where(UserProgress.user_id == user_id)
            .where(UserProgress.total_questions_answered == expected_total_questions)
            .where(UserProgress.total_interviews == expected_total_interviews)
            .where(UserProgress.completed_interviews == expected_completed_interviews)
            .values(**updates, updated_at=sqlalchemy_functions.now())
            .execution_options(synchronize_session=False)
        )
        result = await self.async_session.execute(stmt)
        await self.async_session.commit()
        return result.rowcount == 1
