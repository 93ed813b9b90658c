import sqlalchemy
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.sql import functions as sqlalchemy_functions

from prepforge.models.db.user import User
from prepforge.repository.crud.base import BaseCRUDRepository
from prepforge.utilities.exceptions.database import EntityDoesNotExist


class UserCRUDRepository(BaseCRUDRepository):
    async def get_user_by_id(self, *, user_id: int) -> User:
        stmt = sqlalchemy.select(User).where(User.id == user_id)
        query = await self.async_session.execute(statement=stmt)
        user = query.scalar()
        if not user:
            raise EntityDoesNotExist("User does not exist!")
        return user  # type: ignore

    async def create_or_update_user(self, *, email: str, name: str | None = None, google_id: str | None = None) -> User:
        # Atomic upsert keyed on email; a missing name or google id keeps the stored one
        insert_stmt = pg_insert(User).values(email=email, name=name, google_id=google_id)
        stmt = (
            insert_stmt.on_conflict_do_update(
                index_elements=[User.email],
                set_={
                    "name": sqlalchemy.func.coalesce(insert_stmt.excluded.name, User.name),
                    "google_id": sqlalchemy.func.coalesce(insert_stmt.excluded.google_id, User.google_id),
                    "updated_at": sqlalchemy_functions.now(),
                },
            )
            .returning(User)
            .execution_options(populate_existing=True)
        )
        result = await self.async_session.execute(stmt)
        user = result.scalar_one()
        await self.async_session.commit()
        return user
