"""Currency display helpers."""
from decimal import Decimal, ROUND_HALF_UP


def _group_indian(digits: str) -> str:
    """Group an integer digit string as lakh/crore: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount, symbol: str = "₹", grouping: str = "indian") -> str:
    """Format an amount as currency string, e.g. '₹1,23,456.78'."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")

    if grouping == "indian":
        whole = _group_indian(whole)
    else:
        whole = f"{int(whole):,}"

    return f"{sign}{symbol}{whole}.{fraction}"
