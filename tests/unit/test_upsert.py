"""
Unit Tests - Persistence Gateway and Upsert Engine
"""
from decimal import Decimal

import pytest
from sqlalchemy import UniqueConstraint, select

from retail_seed.database.models import Category, Product, Store, Supplier, User, UserRole, UserStore
from retail_seed.errors import GatewayFailure
from retail_seed.seeding.upsert import NATURAL_KEYS, UpsertEngine, natural_key


async def _catalog(engine: UpsertEngine, gateway):
    await engine.create_if_absent(Category, {"name": "Electronics", "description": "Devices"})
    await engine.create_if_absent(Supplier, {"name": "TechCorp Supplies"})
    category_id = await gateway.find_id(Category, name="Electronics")
    supplier_id = await gateway.find_id(Supplier, name="TechCorp Supplies")
    return category_id, supplier_id


def _product(sku: str, barcode: str, category_id: int, supplier_id: int) -> dict:
    return {
        "sku": sku,
        "name": f"Product {sku}",
        "category_id": category_id,
        "supplier_id": supplier_id,
        "cost_price": Decimal("1.00"),
        "selling_price": Decimal("2.00"),
        "barcode": barcode,
    }


class TestUpsertEngine:
    """Tests for UpsertEngine"""

    async def test_creates_when_absent(self, gateway):
        engine = UpsertEngine(gateway)

        created = await engine.create_if_absent(Category, {"name": "Books", "description": "Reading"})

        assert created is True
        assert await gateway.count(Category) == 1

    async def test_second_create_is_noop(self, gateway):
        engine = UpsertEngine(gateway)
        await engine.create_if_absent(Category, {"name": "Books", "description": "Reading"})

        created = await engine.create_if_absent(Category, {"name": "Books", "description": "Changed"})

        assert created is False
        assert await gateway.count(Category) == 1

    async def test_existing_row_is_not_updated(self, gateway, test_db):
        engine = UpsertEngine(gateway)
        await engine.create_if_absent(Category, {"name": "Books", "description": "Reading"})
        await engine.create_if_absent(Category, {"name": "Books", "description": "Changed"})

        description = (await test_db.execute(
            select(Category.description).where(Category.name == "Books")
        )).scalar_one()

        assert description == "Reading"

    async def test_composite_key(self, gateway, hasher):
        engine = UpsertEngine(gateway)
        await engine.create_if_absent(User, {
            "username": "admin",
            "email": "admin@retailpro.com",
            "password_hash": hasher.hash("password123"),
            "first_name": "System",
            "last_name": "Administrator",
            "role": UserRole.ADMIN,
        })
        user_id = await gateway.find_id(User, username="admin")
        await engine.create_if_absent(Store, {"code": "MAIN", "name": "Main Store", "manager_id": user_id})
        store_id = await gateway.find_id(Store, code="MAIN")

        first = await engine.create_if_absent(UserStore, {"user_id": user_id, "store_id": store_id})
        second = await engine.create_if_absent(UserStore, {"user_id": user_id, "store_id": store_id})

        assert (first, second) == (True, False)
        assert await gateway.count(UserStore) == 1

    async def test_missing_natural_key_rejected(self, gateway):
        engine = UpsertEngine(gateway)

        with pytest.raises(ValueError, match="sku"):
            await engine.create_if_absent(Product, {"name": "No SKU"})

    async def test_conflict_on_other_unique_column_fails(self, gateway, test_db):
        """Only the natural key is upserted; a duplicate barcode is a gateway failure"""
        engine = UpsertEngine(gateway)
        category_id, supplier_id = await _catalog(engine, gateway)
        await engine.create_if_absent(Product, _product("PHONE001", "123", category_id, supplier_id))

        with pytest.raises(GatewayFailure) as exc_info:
            await engine.create_if_absent(Product, _product("PHONE002", "123", category_id, supplier_id))

        assert exc_info.value.entity == "products"
        # Session is still usable after the rollback
        assert await gateway.count(Product) == 1

    async def test_dangling_foreign_key_fails(self, gateway):
        engine = UpsertEngine(gateway)

        with pytest.raises(GatewayFailure):
            await engine.create_if_absent(Product, _product("PHONE001", "123", 999, 999))

        assert await gateway.count(Product) == 0


class TestNaturalKeys:
    """Tests for natural key declarations"""

    def test_every_key_is_unique_in_schema(self):
        for model, columns in NATURAL_KEYS.items():
            table = model.__table__
            single = len(columns) == 1 and table.c[columns[0]].unique
            composite = any(
                isinstance(constraint, UniqueConstraint)
                and tuple(c.name for c in constraint.columns) == columns
                for constraint in table.constraints
            )
            assert single or composite, model.__name__

    def test_undeclared_model(self):
        class NotSeeded:
            pass

        with pytest.raises(ValueError):
            natural_key(NotSeeded)


class TestGateway:
    """Tests for PersistenceGateway reads"""

    async def test_find_id_missing(self, gateway):
        assert await gateway.find_id(Category, name="Nope") is None

    async def test_list_ids_in_insert_order(self, gateway):
        engine = UpsertEngine(gateway)
        for name in ["Books", "Sports", "Clothing"]:
            await engine.create_if_absent(Category, {"name": name})

        ids = await gateway.list_ids(Category)

        assert ids == sorted(ids)
        assert len(ids) == 3
