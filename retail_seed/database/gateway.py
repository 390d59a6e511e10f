"""
Persistence Gateway

Thin per-entity create/read operations over one AsyncSession. Every write
is committed on its own so the next read in the run sees it.
"""

from typing import Any, Dict, List, Optional, Sequence, Type

import structlog
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retail_seed.database.models import Base
from retail_seed.errors import GatewayFailure

logger = structlog.get_logger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING ... RETURNING
_INSERT_BUILDERS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PersistenceGateway:
    """
    Datastore access used by the seeding pipeline.

    Example:
        async with get_db() as session:
            gateway = PersistenceGateway(session)
            created = await gateway.insert_if_absent(Category, {"name": "Books"}, ["name"])
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self._insert = None

    def _insert_builder(self):
        if self._insert is None:
            dialect = self.session.get_bind().dialect.name
            try:
                self._insert = _INSERT_BUILDERS[dialect]
            except KeyError:
                raise GatewayFailure(
                    "insert",
                    "*",
                    NotImplementedError(f"dialect {dialect!r} has no ON CONFLICT support"),
                ) from None
        return self._insert

    async def insert_if_absent(
        self,
        model: Type[Base],
        values: Dict[str, Any],
        conflict_columns: Sequence[str],
    ) -> bool:
        """
        Insert one row unless a row with the same conflict key exists.

        The existence check and the write are a single statement. An existing
        row is never updated.

        Returns:
            bool: True if a new row was inserted
        """
        table = model.__tablename__
        stmt = (
            self._insert_builder()(model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=list(conflict_columns))
            .returning(model.id)
        )
        try:
            result = await self.session.execute(stmt)
            new_id = result.scalar_one_or_none()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Insert rejected", table=table, error=str(e))
            raise GatewayFailure("insert", table, e) from e

        logger.debug("Insert if absent", table=table, created=new_id is not None, id=new_id)
        return new_id is not None

    async def find_id(self, model: Type[Base], **filters: Any) -> Optional[int]:
        """Return the id of the first row matching filters, or None."""
        stmt = select(model.id).filter_by(**filters).order_by(model.id).limit(1)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise GatewayFailure("select", model.__tablename__, e) from e
        return result.scalar_one_or_none()

    async def list_ids(self, model: Type[Base]) -> List[int]:
        """Return every id in the table, oldest first."""
        try:
            result = await self.session.execute(select(model.id).order_by(model.id))
        except SQLAlchemyError as e:
            raise GatewayFailure("select", model.__tablename__, e) from e
        return list(result.scalars().all())

    async def count(self, model: Type[Base], **filters: Any) -> int:
        """Count rows matching filters."""
        stmt = select(func.count()).select_from(model).filter_by(**filters)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise GatewayFailure("count", model.__tablename__, e) from e
        return result.scalar_one()
