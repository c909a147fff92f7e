"""Cost arithmetic for ingredients, dishes and completed foods.

Costs are snapshots: a dish line's used_cost is taken from the ingredient's
unit_price when the line is written, and a food line's usage_cost from the
dish's total_cost at that moment. Later price edits upstream do not rewrite
existing lines or totals; only an explicit dish/food update recomputes them.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

CENTS = Decimal("0.01")
UNIT_PRICE_PLACES = Decimal("0.0001")
ZERO = Decimal("0")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    """Round to cents, half-up."""
    return _to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_unit_price(price, quantity) -> Optional[Decimal]:
    """
    Price per purchased unit: price / quantity.

    Returns None when either operand is missing or not positive; callers keep
    the previous unit_price (or 0 for a new row) in that case.
    """
    if price is None or quantity is None:
        return None
    price = _to_decimal(price)
    quantity = _to_decimal(quantity)
    if price <= 0 or quantity <= 0:
        return None
    return (price / quantity).quantize(UNIT_PRICE_PLACES, rounding=ROUND_HALF_UP)


def calculate_used_cost(unit_price, used_quantity) -> Decimal:
    """Cost of an ingredient line in a dish."""
    return round_money(_to_decimal(unit_price or ZERO) * _to_decimal(used_quantity))


def calculate_usage_cost(dish_total_cost, usage_quantity, usage_unit: str = "serving") -> Decimal:
    """
    Cost of a dish line in a completed food.

    'ratio' and 'serving' apply the same multiplication. The unit only tells
    the reader how to interpret usage_quantity.
    """
    return round_money(_to_decimal(dish_total_cost or ZERO) * _to_decimal(usage_quantity))


def sum_costs(costs: Iterable) -> Decimal:
    total = ZERO
    for cost in costs:
        total += _to_decimal(cost)
    return round_money(total)


def calculate_profit(price, total_cost) -> Decimal:
    """price - total_cost, or 0 when the price is unset or not positive."""
    if price is None or _to_decimal(price) <= 0:
        return round_money(ZERO)
    return round_money(_to_decimal(price) - _to_decimal(total_cost or ZERO))


def calculate_profit_rate(price, total_cost) -> Decimal:
    """Profit as a percentage of price, 2 places; 0 under the same guard as profit."""
    if price is None or _to_decimal(price) <= 0:
        return round_money(ZERO)
    profit = _to_decimal(price) - _to_decimal(total_cost or ZERO)
    return round_money(profit / _to_decimal(price) * 100)
