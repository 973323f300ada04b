"""Repository for investments CRUD operations."""

import dataclasses
import logging
from typing import Optional

from ...core import validation
from ...core.exceptions import InvestmentNotFoundError
from ...core.models import Investment
from ..query import BaseRepository, RowMapper

logger = logging.getLogger(__name__)


def _validated(investment: Investment) -> Investment:
    """Normalize an investment, raising ValidationError on bad fields."""
    current_price = investment.current_price
    if isinstance(current_price, str) and not current_price.strip():
        current_price = None
    if current_price is not None:
        current_price = validation.positive_decimal(current_price, "current_price")
    symbol = (investment.symbol or "").strip().upper() or None
    notes = (investment.notes or "").strip() or None
    return dataclasses.replace(
        investment,
        asset_name=validation.required_text(investment.asset_name, "asset_name"),
        asset_type=validation.investment_type(investment.asset_type),
        quantity=validation.positive_decimal(investment.quantity, "quantity"),
        purchase_price=validation.positive_decimal(investment.purchase_price, "purchase_price"),
        purchase_date=validation.to_date(investment.purchase_date, "purchase_date"),
        symbol=symbol,
        current_price=current_price,
        notes=notes,
    )


class InvestmentsRepository(BaseRepository[Investment]):
    _table = "investments"
    _mapper = RowMapper(Investment)

    def create(self, investment: Investment) -> Investment:
        stored = self._insert(_validated(investment))
        logger.debug("Created investment %s (%s)", stored.id, stored.asset_name)
        return stored

    def list_all(self) -> list[Investment]:
        """All investments, newest first."""
        with self._storage_errors("fetch investments"):
            rows = (
                self._query()
                .order_by("created_at DESC, id DESC")
                .fetch_all(self._db().conn)
            )
        return self._mapper.map_all(rows)

    def update(self, investment: Investment) -> Investment:
        if investment.id is None:
            raise InvestmentNotFoundError("Investment has no id")
        if not self.save(_validated(investment)):
            raise InvestmentNotFoundError(f"Investment {investment.id} not found")
        logger.debug("Updated investment %s", investment.id)
        return self.get_by_id(investment.id)

    def find(self, investment_id: int) -> Investment:
        investment = self.get_by_id(investment_id)
        if investment is None:
            raise InvestmentNotFoundError(f"Investment {investment_id} not found")
        return investment
