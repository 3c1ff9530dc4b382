# inventory_api/utils/money.py

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

Money = Decimal

# Numeric(10, 2)
MAX_PRICE = Decimal("99999999.99")

def D(x) -> Money:
    return x if isinstance(x, Decimal) else Decimal(str(x or "0"))

def round_money(x: Money) -> Money:
    return D(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

def parse_money(v):
    """Decimal rounded to cents, or None when v is blank or not a finite number."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
    try:
        d = D(v)
        if not d.is_finite():
            return None
        return round_money(d)
    except (InvalidOperation, ValueError):
        return None
