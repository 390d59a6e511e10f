"""
Dataset Profiles

Static seed records for the two supported profiles:
- FULL: demo data with products, inventory, customers and leads
- MINIMAL: bootstrap data only (staff, store, categories, suppliers)

Records reference each other by natural key (username, category name,
supplier name); the loader resolves those to ids at seed time.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from retail_seed.database.models import ContactMethod, CustomerType, LeadStatus, UserRole
from retail_seed.errors import UnknownProfileError


class ProfileName(str, Enum):
    """Supported dataset profiles"""
    FULL = "full"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class UserRecord:
    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    role: UserRole


@dataclass(frozen=True)
class StoreRecord:
    code: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str
    email: str


@dataclass(frozen=True)
class CategoryRecord:
    name: str
    description: str


@dataclass(frozen=True)
class SupplierRecord:
    name: str
    contact_person: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str


@dataclass(frozen=True)
class ProductRecord:
    sku: str
    name: str
    description: str
    category_name: str
    supplier_name: str
    cost_price: Decimal
    selling_price: Decimal
    min_stock_level: int
    max_stock_level: int
    barcode: str


@dataclass(frozen=True)
class PreferencesRecord:
    email_notifications: bool = True
    sms_notifications: bool = False
    promotional_emails: bool = True
    preferred_contact_method: ContactMethod = ContactMethod.EMAIL


@dataclass(frozen=True)
class CustomerRecord:
    customer_code: str
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    customer_type: CustomerType
    preferences: PreferencesRecord = field(default_factory=PreferencesRecord)


@dataclass(frozen=True)
class LeadRecord:
    first_name: str
    last_name: str
    email: str
    phone: str
    source: str
    status: LeadStatus
    assigned_to_username: str
    estimated_value: Decimal
    notes: str


@dataclass(frozen=True)
class DatasetProfile:
    """Everything one seeding run writes, in phase order."""
    name: ProfileName
    users: Tuple[UserRecord, ...]
    store: StoreRecord
    categories: Tuple[CategoryRecord, ...]
    suppliers: Tuple[SupplierRecord, ...]
    products: Tuple[ProductRecord, ...] = ()
    customers: Tuple[CustomerRecord, ...] = ()
    leads: Tuple[LeadRecord, ...] = ()
    store_manager_username: str = "admin"
    show_credentials: bool = False

    @property
    def credentials(self) -> Tuple[Tuple[str, str, str], ...]:
        """(role label, username, password) for every seeded user"""
        return tuple((u.role.value.title(), u.username, u.password) for u in self.users)


# =============================================================================
# SHARED SEED DATA
# =============================================================================

MAIN_STORE = StoreRecord(
    code="MAIN",
    name="Main Store",
    address="123 Main Street",
    city="Business City",
    state="Business State",
    zip_code="12345",
    phone="555-0123",
    email="store@retailpro.com",
)

CATEGORIES = (
    CategoryRecord("Electronics", "Electronic devices and accessories"),
    CategoryRecord("Clothing", "Apparel and fashion items"),
    CategoryRecord("Home & Garden", "Home improvement and garden supplies"),
    CategoryRecord("Books", "Books and educational materials"),
    CategoryRecord("Sports", "Sports equipment and accessories"),
)

SUPPLIERS = (
    SupplierRecord(
        name="TechCorp Supplies",
        contact_person="John Smith",
        email="orders@techcorp.com",
        phone="555-0100",
        address="456 Tech Avenue",
        city="Tech City",
        state="Tech State",
        zip_code="54321",
    ),
    SupplierRecord(
        name="Fashion Wholesale",
        contact_person="Jane Doe",
        email="sales@fashionwholesale.com",
        phone="555-0200",
        address="789 Fashion Blvd",
        city="Fashion City",
        state="Fashion State",
        zip_code="67890",
    ),
)


def _staff(username: str, password: str, first_name: str, last_name: str, role: UserRole) -> UserRecord:
    return UserRecord(
        username=username,
        email=f"{username}@retailpro.com",
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=role,
    )


# =============================================================================
# FULL PROFILE
# =============================================================================

FULL_PROFILE = DatasetProfile(
    name=ProfileName.FULL,
    users=(
        _staff("admin", "password123", "System", "Administrator", UserRole.ADMIN),
        _staff("manager", "password123", "Store", "Manager", UserRole.MANAGER),
        _staff("employee", "password123", "Store", "Employee", UserRole.EMPLOYEE),
        _staff("cashier", "password123", "Store", "Cashier", UserRole.CASHIER),
    ),
    store=MAIN_STORE,
    categories=CATEGORIES,
    suppliers=SUPPLIERS,
    products=(
        ProductRecord(
            sku="PHONE001",
            name="Smartphone Pro",
            description="Latest smartphone with advanced features",
            category_name="Electronics",
            supplier_name="TechCorp Supplies",
            cost_price=Decimal("400.00"),
            selling_price=Decimal("599.99"),
            min_stock_level=5,
            max_stock_level=50,
            barcode="1234567890123",
        ),
        ProductRecord(
            sku="LAPTOP001",
            name="Business Laptop",
            description="High-performance laptop for business use",
            category_name="Electronics",
            supplier_name="TechCorp Supplies",
            cost_price=Decimal("800.00"),
            selling_price=Decimal("1199.99"),
            min_stock_level=3,
            max_stock_level=20,
            barcode="1234567890124",
        ),
        ProductRecord(
            sku="SHIRT001",
            name="Cotton T-Shirt",
            description="Comfortable cotton t-shirt",
            category_name="Clothing",
            supplier_name="Fashion Wholesale",
            cost_price=Decimal("8.00"),
            selling_price=Decimal("19.99"),
            min_stock_level=20,
            max_stock_level=100,
            barcode="1234567890125",
        ),
        ProductRecord(
            sku="JEANS001",
            name="Denim Jeans",
            description="Classic blue denim jeans",
            category_name="Clothing",
            supplier_name="Fashion Wholesale",
            cost_price=Decimal("25.00"),
            selling_price=Decimal("49.99"),
            min_stock_level=15,
            max_stock_level=75,
            barcode="1234567890126",
        ),
    ),
    customers=(
        CustomerRecord(
            customer_code="CUST000001",
            first_name="John",
            last_name="Customer",
            email="john.customer@email.com",
            phone="555-1001",
            address="123 Customer Street",
            city="Customer City",
            state="Customer State",
            zip_code="11111",
            customer_type=CustomerType.REGULAR,
        ),
        CustomerRecord(
            customer_code="CUST000002",
            first_name="Jane",
            last_name="VIP",
            email="jane.vip@email.com",
            phone="555-1002",
            address="456 VIP Avenue",
            city="VIP City",
            state="VIP State",
            zip_code="22222",
            customer_type=CustomerType.VIP,
        ),
    ),
    leads=(
        LeadRecord(
            first_name="Potential",
            last_name="Customer",
            email="potential@email.com",
            phone="555-2001",
            source="website",
            status=LeadStatus.NEW,
            assigned_to_username="manager",
            estimated_value=Decimal("500.00"),
            notes="Interested in electronics",
        ),
        LeadRecord(
            first_name="Another",
            last_name="Lead",
            email="another@email.com",
            phone="555-2002",
            source="referral",
            status=LeadStatus.CONTACTED,
            assigned_to_username="manager",
            estimated_value=Decimal("1000.00"),
            notes="Looking for business solutions",
        ),
    ),
    show_credentials=True,
)


# =============================================================================
# MINIMAL PROFILE
# =============================================================================

MINIMAL_PROFILE = DatasetProfile(
    name=ProfileName.MINIMAL,
    users=(
        _staff("admin", "Admin123!", "System", "Administrator", UserRole.ADMIN),
        _staff("manager", "Manager123!", "Store", "Manager", UserRole.MANAGER),
        _staff("employee", "Employee123!", "Store", "Employee", UserRole.EMPLOYEE),
    ),
    store=MAIN_STORE,
    categories=CATEGORIES,
    suppliers=SUPPLIERS,
)


PROFILES: Dict[ProfileName, DatasetProfile] = {
    ProfileName.FULL: FULL_PROFILE,
    ProfileName.MINIMAL: MINIMAL_PROFILE,
}


def get_profile(name: Optional[Union[str, ProfileName]] = None) -> DatasetProfile:
    """
    Select a dataset profile by name.

    Args:
        name: "full" or "minimal" (case-insensitive); defaults to full

    Raises:
        UnknownProfileError: If the name matches no profile
    """
    if name is None:
        return FULL_PROFILE
    try:
        key = ProfileName(name.lower() if isinstance(name, str) else name)
    except ValueError:
        raise UnknownProfileError(
            f"Unknown profile {name!r}; expected one of {[p.value for p in ProfileName]}"
        ) from None
    return PROFILES[key]
