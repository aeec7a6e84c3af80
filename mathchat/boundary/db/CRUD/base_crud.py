"""
Shared row operations for chat record tables.

Conversations, messages and user settings are all keyed by a UUID primary
key; this class holds the id-keyed operations the record store needs and
leaves owner-scoped queries to the table-specific subclasses.

Dependencies: sqlalchemy
System role: Base class for conversation, message and settings CRUD
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mathchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Id-keyed operations over one chat table.

    Every method flushes inside the caller's session and never commits;
    SqlChatStore owns the transaction boundary.

    Attributes:
        model: Mapped class the operations target
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values) -> ModelT:
        """
        Insert a row and load its server-side defaults.

        Args:
            session: Session of the enclosing store operation
            **values: Column values; id and timestamps are generated

        Returns:
            The inserted row with id, created_at (and updated_at) populated
        """
        row = self.model(**values)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Fetch a row by primary key, None when absent."""
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: UUID, **values) -> ModelT | None:
        """
        Apply column changes to one row and return it as stored.

        The `onupdate` hooks of the mapped columns fire, so tables with an
        updated_at column get it bumped unless a value is passed explicitly.

        Returns:
            The updated row, or None when no row has that id
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .returning(self.model)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        # Dependent rows (messages) are removed by the subclass first
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
