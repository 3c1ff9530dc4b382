# inventory_api/utils/parsing.py
import math

# store integers are signed 64-bit
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def in_int_range(n):
    return INT_MIN <= n <= INT_MAX


def parse_opt_int(v, bounded=True):
    """int, or None when v is absent or not a whole number (or out of range when bounded)."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str) and v.strip().lower() in {"", "null"}:
        return None
    if isinstance(v, float):
        n = int(v) if v.is_integer() else None
    else:
        try:
            n = int(v)
        except (TypeError, ValueError):
            return None
    if n is not None and bounded and not in_int_range(n):
        return None
    return n


def parse_opt_float(v):
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str) and v.strip() == "":
        return None
    try:
        n = float(v)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None
