"""Custom exceptions for the portfolio dashboard."""


class PortfolioDashboardError(Exception):
    """Base exception."""
    pass


class AssetNotFoundError(PortfolioDashboardError):
    def __init__(self, asset_id: str):
        super().__init__(f"Asset {asset_id!r} not found")
        self.asset_id = asset_id


class ValidationError(PortfolioDashboardError):
    pass


class InvestmentNotFoundError(PortfolioDashboardError):
    pass


class InvestmentStoreError(PortfolioDashboardError):
    """Storage failure in the investments table; carries a readable message."""
    pass
