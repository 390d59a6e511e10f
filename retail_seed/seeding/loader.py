"""
Dependency-Ordered Entity Loader

Runs the seeding phases in foreign-key order:

    users -> store -> user_stores -> categories -> suppliers
          -> products -> inventory -> customers (+ preferences) -> leads

Each phase is an async function taking the persistence gateway and the
accumulated SeedContext and returning the updated context. Phases run
strictly one after another, records within a phase in list order, and
every write is committed before the next step reads it back.
"""

import random
from dataclasses import dataclass
from operator import attrgetter
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import structlog

from retail_seed.database.gateway import PersistenceGateway
from retail_seed.database.models import (
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
from retail_seed.seeding.hashing import CredentialHasher
from retail_seed.seeding.profiles import DatasetProfile
from retail_seed.seeding.resolver import ReferenceResolver
from retail_seed.seeding.summary import SeedSummary
from retail_seed.seeding.upsert import UpsertEngine

logger = structlog.get_logger(__name__)

DEFAULT_INVENTORY_RANGE = (10, 60)


@dataclass
class SeedContext:
    """State carried from one phase to the next"""
    profile: DatasetProfile
    hasher: CredentialHasher
    rng: random.Random
    summary: SeedSummary
    inventory_range: Tuple[int, int] = DEFAULT_INVENTORY_RANGE


PhaseFunc = Callable[[PersistenceGateway, SeedContext], Awaitable[SeedContext]]


@dataclass(frozen=True)
class Phase:
    """
    One pipeline step.

    records: returns the profile's records for this phase; an empty result
        skips the phase. None means the phase always runs.
    depends_on: phases whose skipping also skips this one.
    """
    name: str
    run: PhaseFunc
    records: Optional[Callable[[DatasetProfile], Sequence]] = None
    depends_on: Tuple[str, ...] = ()


# =============================================================================
# PHASES
# =============================================================================

async def seed_users(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Create staff accounts with hashed passwords."""
    engine = UpsertEngine(gateway)
    for user in ctx.profile.users:
        created = await engine.create_if_absent(User, {
            "username": user.username,
            "email": user.email,
            "password_hash": ctx.hasher.hash(user.password),
            "first_name": user.first_name,
            "last_name": user.last_name,
            "role": user.role,
        })
        ctx.summary.record("users", created)
    return ctx


async def seed_store(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Create the store, managed by the profile's store manager."""
    engine = UpsertEngine(gateway)
    resolver = ReferenceResolver(gateway, phase="store")
    store = ctx.profile.store

    manager_id = await resolver.user(ctx.profile.store_manager_username)
    created = await engine.create_if_absent(Store, {
        "code": store.code,
        "name": store.name,
        "address": store.address,
        "city": store.city,
        "state": store.state,
        "zip_code": store.zip_code,
        "phone": store.phone,
        "email": store.email,
        "manager_id": manager_id,
    })
    ctx.summary.record("stores", created)
    return ctx


async def seed_user_stores(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Assign every user in the datastore to the store."""
    engine = UpsertEngine(gateway)
    resolver = ReferenceResolver(gateway, phase="user_stores")

    store_id = await resolver.store(ctx.profile.store.code)
    for user_id in await resolver.all_users():
        created = await engine.create_if_absent(UserStore, {
            "user_id": user_id,
            "store_id": store_id,
        })
        ctx.summary.record("user_stores", created)
    return ctx


async def seed_categories(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    engine = UpsertEngine(gateway)
    for category in ctx.profile.categories:
        created = await engine.create_if_absent(Category, {
            "name": category.name,
            "description": category.description,
        })
        ctx.summary.record("categories", created)
    return ctx


async def seed_suppliers(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    engine = UpsertEngine(gateway)
    for supplier in ctx.profile.suppliers:
        created = await engine.create_if_absent(Supplier, {
            "name": supplier.name,
            "contact_person": supplier.contact_person,
            "email": supplier.email,
            "phone": supplier.phone,
            "address": supplier.address,
            "city": supplier.city,
            "state": supplier.state,
            "zip_code": supplier.zip_code,
        })
        ctx.summary.record("suppliers", created)
    return ctx


async def seed_products(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Create products linked to their category and supplier."""
    engine = UpsertEngine(gateway)
    resolver = ReferenceResolver(gateway, phase="products")
    for product in ctx.profile.products:
        category_id = await resolver.category(product.category_name)
        supplier_id = await resolver.supplier(product.supplier_name)
        created = await engine.create_if_absent(Product, {
            "sku": product.sku,
            "name": product.name,
            "description": product.description,
            "category_id": category_id,
            "supplier_id": supplier_id,
            "cost_price": product.cost_price,
            "selling_price": product.selling_price,
            "min_stock_level": product.min_stock_level,
            "max_stock_level": product.max_stock_level,
            "barcode": product.barcode,
        })
        ctx.summary.record("products", created)
    return ctx


async def seed_inventory(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Stock every seeded product at the store with a random starting quantity."""
    engine = UpsertEngine(gateway)
    resolver = ReferenceResolver(gateway, phase="inventory")
    low, high = ctx.inventory_range

    store_id = await resolver.store(ctx.profile.store.code)
    for product in ctx.profile.products:
        product_id = await resolver.product(product.sku)
        created = await engine.create_if_absent(Inventory, {
            "product_id": product_id,
            "store_id": store_id,
            "quantity_on_hand": ctx.rng.randrange(low, high),
            "quantity_reserved": 0,
        })
        ctx.summary.record("inventory", created)
    return ctx


async def seed_customers(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Create customers, each with its preferences row."""
    engine = UpsertEngine(gateway)
    resolver = ReferenceResolver(gateway, phase="customers")
    for customer in ctx.profile.customers:
        created = await engine.create_if_absent(Customer, {
            "customer_code": customer.customer_code,
            "first_name": customer.first_name,
            "last_name": customer.last_name,
            "email": customer.email,
            "phone": customer.phone,
            "address": customer.address,
            "city": customer.city,
            "state": customer.state,
            "zip_code": customer.zip_code,
            "customer_type": customer.customer_type,
        })
        ctx.summary.record("customers", created)

        customer_id = await resolver.customer(customer.customer_code)
        preferences = customer.preferences
        created = await engine.create_if_absent(CustomerPreferences, {
            "customer_id": customer_id,
            "email_notifications": preferences.email_notifications,
            "sms_notifications": preferences.sms_notifications,
            "promotional_emails": preferences.promotional_emails,
            "preferred_contact_method": preferences.preferred_contact_method,
        })
        ctx.summary.record("customer_preferences", created)
    return ctx


async def seed_leads(gateway: PersistenceGateway, ctx: SeedContext) -> SeedContext:
    """Create sales leads assigned to a user."""
    engine = UpsertEngine(gateway)
    resolver = ReferenceResolver(gateway, phase="leads")
    for lead in ctx.profile.leads:
        assignee_id = await resolver.user(lead.assigned_to_username)
        created = await engine.create_if_absent(Lead, {
            "first_name": lead.first_name,
            "last_name": lead.last_name,
            "email": lead.email,
            "phone": lead.phone,
            "source": lead.source,
            "status": lead.status,
            "assigned_to": assignee_id,
            "estimated_value": lead.estimated_value,
            "notes": lead.notes,
        })
        ctx.summary.record("leads", created)
    return ctx


PHASES: Tuple[Phase, ...] = (
    Phase("users", seed_users, records=attrgetter("users")),
    Phase("store", seed_store, depends_on=("users",)),
    Phase("user_stores", seed_user_stores, depends_on=("users", "store")),
    Phase("categories", seed_categories, records=attrgetter("categories")),
    Phase("suppliers", seed_suppliers, records=attrgetter("suppliers")),
    Phase("products", seed_products, records=attrgetter("products"), depends_on=("categories", "suppliers")),
    Phase("inventory", seed_inventory, records=attrgetter("products"), depends_on=("products", "store")),
    Phase("customers", seed_customers, records=attrgetter("customers")),
    Phase("leads", seed_leads, records=attrgetter("leads"), depends_on=("users",)),
)


# =============================================================================
# LOADER
# =============================================================================

class SeedLoader:
    """
    Drives the phases for one profile against one gateway.

    Example:
        async with get_db() as session:
            loader = SeedLoader(PersistenceGateway(session), get_profile("full"))
            summary = await loader.run()
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        profile: DatasetProfile,
        hasher: Optional[CredentialHasher] = None,
        rng: Optional[random.Random] = None,
        inventory_range: Tuple[int, int] = DEFAULT_INVENTORY_RANGE,
        phases: Sequence[Phase] = PHASES,
    ):
        self.gateway = gateway
        self.profile = profile
        self.hasher = hasher or CredentialHasher()
        self.rng = rng or random.Random()
        self.inventory_range = inventory_range
        self.phases = list(phases)

    def _skip_reason(self, phase: Phase, skipped: List[str]) -> Optional[str]:
        if phase.records is not None and not phase.records(self.profile):
            return "no records in profile"
        blocked = [dep for dep in phase.depends_on if dep in skipped]
        if blocked:
            return f"depends on skipped phase(s): {', '.join(blocked)}"
        return None

    async def run(self) -> SeedSummary:
        """Execute every phase in order and return the run summary."""
        summary = SeedSummary(
            profile=self.profile.name.value,
            credentials=self.profile.credentials if self.profile.show_credentials else (),
        )
        ctx = SeedContext(
            profile=self.profile,
            hasher=self.hasher,
            rng=self.rng,
            summary=summary,
            inventory_range=self.inventory_range,
        )

        logger.info("Starting database seeding", profile=summary.profile)
        for phase in self.phases:
            reason = self._skip_reason(phase, summary.skipped_phases)
            if reason:
                logger.info("Skipping phase", phase=phase.name, reason=reason)
                summary.skipped_phases.append(phase.name)
                continue

            with structlog.contextvars.bound_contextvars(phase=phase.name):
                logger.info("Seeding phase")
                ctx = await phase.run(self.gateway, ctx)
            summary.completed_phases.append(phase.name)

        logger.info(
            "Database seeding completed",
            profile=summary.profile,
            created=summary.total_created,
            skipped=summary.skipped_phases,
        )
        return ctx.summary
