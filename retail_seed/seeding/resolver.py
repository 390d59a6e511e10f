"""
Reference Resolver

Reads committed rows back by natural key to obtain the ids later phases
need as foreign keys. A missing row is fatal: no dependent record is ever
built around an unresolved reference.
"""

from typing import Any, List, Optional, Type

import structlog

from retail_seed.database.gateway import PersistenceGateway
from retail_seed.database.models import Base, Category, Customer, Product, Store, Supplier, User
from retail_seed.errors import PrerequisiteNotFoundError

logger = structlog.get_logger(__name__)


class ReferenceResolver:
    """Natural-key lookups for foreign-key assignment."""

    def __init__(self, gateway: PersistenceGateway, phase: Optional[str] = None):
        self.gateway = gateway
        self.phase = phase

    async def require(self, model: Type[Base], **key: Any) -> int:
        """
        Return the id of the row matching key.

        Raises:
            PrerequisiteNotFoundError: If no such row exists
        """
        ident = await self.gateway.find_id(model, **key)
        if ident is None:
            logger.error(
                "Prerequisite not found",
                entity=model.__tablename__,
                key=key,
                phase=self.phase,
            )
            raise PrerequisiteNotFoundError(model.__tablename__, key, phase=self.phase)
        return ident

    async def user(self, username: str) -> int:
        return await self.require(User, username=username)

    async def store(self, code: str) -> int:
        return await self.require(Store, code=code)

    async def category(self, name: str) -> int:
        return await self.require(Category, name=name)

    async def supplier(self, name: str) -> int:
        return await self.require(Supplier, name=name)

    async def product(self, sku: str) -> int:
        return await self.require(Product, sku=sku)

    async def customer(self, customer_code: str) -> int:
        return await self.require(Customer, customer_code=customer_code)

    async def all_users(self) -> List[int]:
        """Every user id in the datastore; at least one must exist."""
        ids = await self.gateway.list_ids(User)
        if not ids:
            raise PrerequisiteNotFoundError(User.__tablename__, {}, phase=self.phase)
        return ids
