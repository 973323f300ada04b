"""Boundary validation for asset and investment fields.

Everything entering the store or the investments table passes through here,
so derived state (value, totals, series) is never computed from bad input.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from .exceptions import ValidationError
from .models import AssetType, InvestmentType


def to_decimal(value, field_name: str) -> Decimal:
    """Coerce int/float/str/Decimal to a finite Decimal."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be finite, got {value!r}")
    return result


def positive_decimal(value, field_name: str) -> Decimal:
    result = to_decimal(value, field_name)
    if result <= 0:
        raise ValidationError(f"{field_name} must be a positive number, got {result}")
    return result


def required_text(value, field_name: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field_name} is required")
    return text


def to_date(value, field_name: str) -> date:
    """Accept a date or an ISO YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD), got {value!r}")


def asset_type(value) -> AssetType:
    try:
        return AssetType(value.lower() if isinstance(value, str) else value)
    except ValueError:
        choices = ", ".join(t.value for t in AssetType)
        raise ValidationError(f"Invalid asset type {value!r}. Choose from: {choices}")


def investment_type(value) -> InvestmentType:
    try:
        return InvestmentType(value.lower() if isinstance(value, str) else value)
    except ValueError:
        choices = ", ".join(t.value for t in InvestmentType)
        raise ValidationError(f"Invalid investment type {value!r}. Choose from: {choices}")


# Field name -> coercer for the editable subset of Asset
ASSET_FIELDS = {
    "name": lambda v: required_text(v, "name"),
    "symbol": lambda v: required_text(v, "symbol").upper(),
    "asset_type": asset_type,
    "shares": lambda v: positive_decimal(v, "shares"),
    "price": lambda v: positive_decimal(v, "price"),
    "change": lambda v: to_decimal(v, "change"),
}


def asset_fields(fields: dict) -> dict:
    """Validate a (partial) mapping of editable asset fields.

    Raises ValidationError for unknown or read-only fields (id, value,
    history) and for invalid values. Returns the coerced mapping.
    """
    unknown = sorted(set(fields) - set(ASSET_FIELDS))
    if unknown:
        raise ValidationError(f"Cannot set field(s): {', '.join(unknown)}")
    return {name: ASSET_FIELDS[name](val) for name, val in fields.items()}
