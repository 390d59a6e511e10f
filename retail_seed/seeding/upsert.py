"""
Idempotent Upsert Engine

Create-if-absent for one entity against its declared natural key. The
update clause is always empty: a row that already exists keeps whatever
values it has, including edits made after an earlier run.
"""

from typing import Any, Dict, Mapping, Tuple, Type

import structlog

from retail_seed.database.gateway import PersistenceGateway
from retail_seed.database.models import (
    Base,
    Category,
    Customer,
    CustomerPreferences,
    Inventory,
    Lead,
    Product,
    Store,
    Supplier,
    User,
    UserStore,
)

logger = structlog.get_logger(__name__)

# Natural (or composite) key per entity; each is backed by a unique constraint
NATURAL_KEYS: Dict[Type[Base], Tuple[str, ...]] = {
    User: ("username",),
    Store: ("code",),
    UserStore: ("user_id", "store_id"),
    Category: ("name",),
    Supplier: ("name",),
    Product: ("sku",),
    Inventory: ("product_id", "store_id"),
    Customer: ("customer_code",),
    CustomerPreferences: ("customer_id",),
    Lead: ("email",),
}


def natural_key(model: Type[Base]) -> Tuple[str, ...]:
    """Declared natural key columns for model."""
    try:
        return NATURAL_KEYS[model]
    except KeyError:
        raise ValueError(f"No natural key declared for {model.__name__}") from None


class UpsertEngine:
    """
    Conditional create keyed on natural keys.

    Example:
        engine = UpsertEngine(gateway)
        created = await engine.create_if_absent(Category, {"name": "Books", "description": "..."})
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def create_if_absent(self, model: Type[Base], values: Mapping[str, Any]) -> bool:
        """
        Insert values unless a row with the same natural key exists.

        Returns:
            bool: True if the row was created, False if it was already present

        Raises:
            ValueError: If a natural key column is missing from values
        """
        key_columns = natural_key(model)
        missing = [column for column in key_columns if values.get(column) is None]
        if missing:
            raise ValueError(f"{model.__name__} values missing natural key column(s): {missing}")

        created = await self.gateway.insert_if_absent(model, dict(values), key_columns)
        logger.debug(
            "Created" if created else "Already present",
            entity=model.__tablename__,
            key={column: values[column] for column in key_columns},
        )
        return created
