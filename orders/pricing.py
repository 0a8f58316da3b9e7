"""Order cost estimation.

The page count is a flat placeholder, not a parse of the page ranges: shop
staff price the actual job, this number only gives the customer an estimate.
"""

from decimal import Decimal

from .models import Order

COLOR_PAGE_RATE = Decimal("8")
STANDARD_PAGE_RATE = Decimal("1.5")
ALL_PAGES_COUNT = 10
SELECTED_PAGES_COUNT = 5
BINDING_SURCHARGE = Decimal("25")

BINDING_TYPES = frozenset({Order.PrintType.SPIRAL_BINDING.value, Order.PrintType.SOFT_BINDING.value})


def estimate_cost(print_type: str, selected_pages: str, copies: int) -> Decimal:
    """Return the total cost for an order; custom prints are priced manually (0)."""
    if print_type == Order.PrintType.CUSTOM_PRINT:
        return Decimal("0")

    rate = COLOR_PAGE_RATE if print_type == Order.PrintType.COLOR else STANDARD_PAGE_RATE
    pages = ALL_PAGES_COUNT if selected_pages == "all" else SELECTED_PAGES_COUNT
    total = rate * pages * (copies or 1)

    if print_type in BINDING_TYPES:
        total += BINDING_SURCHARGE
    return total
