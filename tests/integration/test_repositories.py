"""Integration tests for the investments repository."""

from datetime import date
from decimal import Decimal

import pytest

from portfolio_dashboard.core.exceptions import (
    InvestmentNotFoundError,
    InvestmentStoreError,
    ValidationError,
)
from portfolio_dashboard.core.models import Investment, InvestmentType
from portfolio_dashboard.data.repositories.investments_repo import InvestmentsRepository


def _investment(name="Apple Inc.", **overrides):
    fields = dict(
        asset_name=name,
        asset_type=InvestmentType.STOCK,
        quantity=Decimal("10"),
        purchase_price=Decimal("150"),
        purchase_date=date(2024, 1, 15),
    )
    fields.update(overrides)
    return Investment(**fields)


class TestInvestmentsRepository:
    def test_create_and_get(self, isolated_db):
        repo = InvestmentsRepository()
        inv = repo.create(_investment(symbol="aapl", current_price=Decimal("175.34"), notes="long term"))

        assert inv.id is not None
        assert inv.symbol == "AAPL"
        assert inv.created_at is not None

        fetched = repo.get_by_id(inv.id)
        assert fetched.asset_name == "Apple Inc."
        assert fetched.asset_type == InvestmentType.STOCK
        assert fetched.quantity == Decimal("10")
        assert fetched.purchase_date == date(2024, 1, 15)
        assert fetched.current_price == Decimal("175.34")
        assert fetched.notes == "long term"

    def test_optional_fields_stored_as_null(self, isolated_db):
        inv = InvestmentsRepository().create(_investment(symbol="", notes="  "))
        assert inv.symbol is None
        assert inv.notes is None
        assert inv.current_price is None

    def test_string_inputs_coerced(self, isolated_db):
        inv = InvestmentsRepository().create(_investment(
            asset_type="mutual_fund", quantity="12.5", purchase_price="380.20", purchase_date="2023-06-01",
        ))
        assert inv.asset_type == InvestmentType.MUTUAL_FUND
        assert inv.quantity == Decimal("12.5")
        assert inv.purchase_date == date(2023, 6, 1)

    def test_derived_values(self, isolated_db):
        inv = InvestmentsRepository().create(_investment(current_price=Decimal("175")))
        assert inv.cost_basis == Decimal("1500")
        assert inv.current_value == Decimal("1750")
        assert inv.unrealized_pnl == Decimal("250")

    def test_list_newest_first(self, isolated_db):
        repo = InvestmentsRepository()
        repo.create(_investment("First"))
        repo.create(_investment("Second"))
        repo.create(_investment("Third"))
        assert [i.asset_name for i in repo.list_all()] == ["Third", "Second", "First"]

    def test_list_empty(self, isolated_db):
        assert InvestmentsRepository().list_all() == []

    def test_update(self, isolated_db):
        repo = InvestmentsRepository()
        inv = repo.create(_investment())
        inv.quantity = Decimal("12")
        inv.current_price = Decimal("180")
        updated = repo.update(inv)
        assert updated.quantity == Decimal("12")
        assert updated.current_price == Decimal("180")
        assert len(repo.list_all()) == 1

    def test_blank_current_price_clears_it(self, isolated_db):
        repo = InvestmentsRepository()
        inv = repo.create(_investment(current_price=Decimal("2")))
        inv.current_price = "  "
        updated = repo.update(inv)
        assert updated.current_price is None
        assert updated.unrealized_pnl == Decimal("0")

    def test_update_missing_raises(self, isolated_db):
        with pytest.raises(InvestmentNotFoundError):
            InvestmentsRepository().update(_investment(id=999))

    def test_update_without_id_raises(self, isolated_db):
        with pytest.raises(InvestmentNotFoundError):
            InvestmentsRepository().update(_investment())

    def test_find_missing_raises(self, isolated_db):
        with pytest.raises(InvestmentNotFoundError):
            InvestmentsRepository().find(42)

    def test_delete(self, isolated_db):
        repo = InvestmentsRepository()
        inv = repo.create(_investment())
        assert repo.delete(inv.id) is True
        assert repo.get_by_id(inv.id) is None

    def test_delete_nonexistent(self, isolated_db):
        assert InvestmentsRepository().delete(9999) is False

    @pytest.mark.parametrize("overrides", [
        {"asset_name": ""},
        {"quantity": Decimal("0")},
        {"purchase_price": Decimal("-1")},
        {"current_price": Decimal("0")},
        {"asset_type": "bond"},
        {"purchase_date": "15/01/2024"},
    ])
    def test_validation(self, isolated_db, overrides):
        repo = InvestmentsRepository()
        with pytest.raises(ValidationError):
            repo.create(_investment(**overrides))
        assert repo.list_all() == []

    def test_invalid_update_leaves_row(self, isolated_db):
        repo = InvestmentsRepository()
        inv = repo.create(_investment())
        inv.quantity = Decimal("-5")
        with pytest.raises(ValidationError):
            repo.update(inv)
        assert repo.get_by_id(inv.id).quantity == Decimal("10")

    def test_storage_error_has_message(self, isolated_db):
        isolated_db.conn.execute("DROP TABLE investments")
        with pytest.raises(InvestmentStoreError, match="Failed to fetch investments"):
            InvestmentsRepository().list_all()


class TestTransactionContextManager:
    def test_rollback_on_error(self, isolated_db):
        repo = InvestmentsRepository()
        with pytest.raises(RuntimeError):
            with isolated_db.transaction():
                repo.create(_investment("Should Be Rolled Back"))
                raise RuntimeError("Forced rollback")
        assert repo.list_all() == []

    def test_commit_on_success(self, isolated_db):
        repo = InvestmentsRepository()
        with isolated_db.transaction():
            repo.create(_investment("A"))
            repo.create(_investment("B"))
        assert len(repo.list_all()) == 2
