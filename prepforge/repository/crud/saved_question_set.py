import sqlalchemy

from prepforge.models.db.saved_question_set import SavedQuestionSet
from prepforge.repository.crud.base import BaseCRUDRepository
from prepforge.utilities.exceptions.database import EntityDoesNotExist


class SavedQuestionSetCRUDRepository(BaseCRUDRepository):
    async def create_set(
        self,
        *,
        user_id: int,
        title: str,
        questions: list[dict],
        description: str | None = None,
        tags: list[str] | None = None,
        interview_id: int | None = None,
    ) -> SavedQuestionSet:
        new_set = SavedQuestionSet(
            user_id=user_id,
            interview_id=interview_id,
            title=title,
            description=description,
            questions=questions,
            tags=list(dict.fromkeys(tags or [])),
            is_favorite=False,
            practice_count=0,
        )
        self.async_session.add(new_set)
        await self.async_session.commit()
        await self.async_session.refresh(new_set)
        return new_set

    async def get_owned(self, *, set_id: int, user_id: int) -> SavedQuestionSet:
        stmt = (
            sqlalchemy.select(SavedQuestionSet)
            .where(SavedQuestionSet.id == set_id)
            .where(SavedQuestionSet.user_id == user_id)
        )
        query = await self.async_session.execute(statement=stmt)
        question_set = query.scalar()
        if not question_set:
            raise EntityDoesNotExist("Question set does not exist!")
        return question_set  # type: ignore

    async def list_by_user(self, *, user_id: int, tag: str | None = None) -> list[SavedQuestionSet]:
        stmt = sqlalchemy.select(SavedQuestionSet).where(SavedQuestionSet.user_id == user_id)
        if tag:
            stmt = stmt.where(SavedQuestionSet.tags.contains([tag]))
        stmt = stmt.order_by(SavedQuestionSet.is_favorite.desc(), SavedQuestionSet.created_at.desc())
        query = await self.async_session.execute(statement=stmt)
        return list(query.scalars().all())

    async def list_tags(self, *, user_id: int) -> list[str]:
        stmt = sqlalchemy.select(SavedQuestionSet.tags).where(SavedQuestionSet.user_id == user_id)
        query = await self.async_session.execute(statement=stmt)
        tags: set[str] = set()
        for row_tags in query.scalars().all():
            tags.update(tag for tag in (row_tags or []) if isinstance(tag, str))
        return sorted(tags)

    async def toggle_favorite(self, *, set_id: int, user_id: int) -> SavedQuestionSet:
        question_set = await self.get_owned(set_id=set_id, user_id=user_id)
        question_set.is_favorite = not question_set.is_favorite
        await self.async_session.commit()
        await self.async_session.refresh(question_set)
        return question_set

    async def increment_practice(self, *, set_id: int, user_id: int) -> SavedQuestionSet:
        stmt = (
            sqlalchemy.update(SavedQuestionSet)
            .where(SavedQuestionSet.id == set_id)
            .where(SavedQuestionSet.user_id == user_id)
            .values(practice_count=SavedQuestionSet.practice_count + 1)
            .returning(SavedQuestionSet)
            .execution_options(populate_existing=True)
        )
        result = await self.async_session.execute(stmt)
        question_set = result.scalar()
        if not question_set:
            await self.async_session.rollback()
            raise EntityDoesNotExist("Question set does not exist!")
        await self.async_session.commit()
        return question_set  # type: ignore

    async def delete_set(self, *, set_id: int, user_id: int) -> None:
        stmt = (
            sqlalchemy.delete(SavedQuestionSet)
            .where(SavedQuestionSet.id == set_id)
            .where(SavedQuestionSet.user_id == user_id)
        )
        result = await self.async_session.execute(stmt)
        if result.rowcount == 0:
            await self.async_session.rollback()
            raise EntityDoesNotExist("Question set does not exist!")
        await self.async_session.commit()
