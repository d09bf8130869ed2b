from decimal import Decimal, InvalidOperation

from agrichain.core.exceptions import ValidationError

QUANTITY_STEP = Decimal("0.001")
MONEY_STEP = Decimal("0.01")
ZERO = Decimal("0")

# Largest values the Numeric(14, 3), Numeric(12, 2) and Numeric(16, 2) columns hold.
MAX_QUANTITY = Decimal("99999999999.999")
MAX_RATE = Decimal("9999999999.99")
MAX_AMOUNT = Decimal("99999999999999.99")


def _quantize(value, step: Decimal, limit: Decimal, label: str) -> Decimal:
    try:
        result = Decimal(str(value)).quantize(step)
    except InvalidOperation as exc:
        raise ValidationError(f"{label} must be a number") from exc
    if not result.is_finite() or abs(result) > limit:
        raise ValidationError(f"{label} is out of range")
    return result


def to_quantity(value, label: str = "Quantity") -> Decimal:
    return _quantize(value, QUANTITY_STEP, MAX_QUANTITY, label)


def to_money(value, label: str = "Rate", limit: Decimal = MAX_RATE) -> Decimal:
    return _quantize(value, MONEY_STEP, limit, label)


def compute_amount(quantity, rate) -> Decimal:
    # Quantity is in tons and rate is per ton.
    return to_money(Decimal(str(quantity)) * Decimal(str(rate)), "Amount", MAX_AMOUNT)
