"""
Unit Tests - Dataset Profiles
"""
import pytest

from retail_seed.database.models import UserRole
from retail_seed.errors import UnknownProfileError
from retail_seed.seeding.profiles import (
    FULL_PROFILE,
    MINIMAL_PROFILE,
    ProfileName,
    get_profile,
)


class TestGetProfile:
    """Tests for profile selection"""

    @pytest.mark.parametrize("name", ["full", "FULL", ProfileName.FULL])
    def test_full_by_name(self, name):
        assert get_profile(name) is FULL_PROFILE

    def test_minimal_by_name(self):
        assert get_profile("minimal") is MINIMAL_PROFILE

    def test_defaults_to_full(self):
        assert get_profile() is FULL_PROFILE

    def test_unknown_profile(self):
        with pytest.raises(UnknownProfileError):
            get_profile("demo")


class TestProfileContents:
    """Tests for the static seed records"""

    def test_full_profile(self):
        profile = FULL_PROFILE

        assert [u.username for u in profile.users] == ["admin", "manager", "employee", "cashier"]
        assert [u.role for u in profile.users] == [
            UserRole.ADMIN, UserRole.MANAGER, UserRole.EMPLOYEE, UserRole.CASHIER,
        ]
        assert len(profile.products) == 4
        assert len(profile.customers) == 2
        assert len(profile.leads) == 2
        assert profile.show_credentials

    def test_minimal_profile(self):
        profile = MINIMAL_PROFILE

        assert [u.username for u in profile.users] == ["admin", "manager", "employee"]
        assert profile.products == ()
        assert profile.customers == ()
        assert profile.leads == ()
        assert not profile.show_credentials

    def test_profiles_share_store_categories_and_suppliers(self):
        assert FULL_PROFILE.store == MINIMAL_PROFILE.store
        assert FULL_PROFILE.categories == MINIMAL_PROFILE.categories
        assert FULL_PROFILE.suppliers == MINIMAL_PROFILE.suppliers
        assert len(FULL_PROFILE.categories) == 5
        assert len(FULL_PROFILE.suppliers) == 2

    def test_product_references_exist_in_profile(self):
        category_names = {c.name for c in FULL_PROFILE.categories}
        supplier_names = {s.name for s in FULL_PROFILE.suppliers}

        for product in FULL_PROFILE.products:
            assert product.category_name in category_names
            assert product.supplier_name in supplier_names

    def test_lead_assignees_are_seeded_users(self):
        usernames = {u.username for u in FULL_PROFILE.users}

        assert all(lead.assigned_to_username in usernames for lead in FULL_PROFILE.leads)
        assert FULL_PROFILE.store_manager_username in usernames

    def test_natural_keys_unique_within_profile(self):
        skus = [p.sku for p in FULL_PROFILE.products]
        barcodes = [p.barcode for p in FULL_PROFILE.products]
        codes = [c.customer_code for c in FULL_PROFILE.customers]

        assert len(set(skus)) == len(skus)
        assert len(set(barcodes)) == len(barcodes)
        assert len(set(codes)) == len(codes)

    def test_credentials(self):
        assert MINIMAL_PROFILE.credentials == (
            ("Admin", "admin", "Admin123!"),
            ("Manager", "manager", "Manager123!"),
            ("Employee", "employee", "Employee123!"),
        )
        assert FULL_PROFILE.credentials[-1] == ("Cashier", "cashier", "password123")
