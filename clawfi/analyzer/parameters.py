import math
from typing import Any, Optional

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def safe_float(val: Any, default: float = 0.0) -> float:
    """
    Lenient numeric parse. Strings like "0.35" parse, anything else
    (None, dicts, garbage, NaN/inf) falls back to default.
    """
    if isinstance(val, (dict, list, type(None), bool)):
        return default
    try:
        num = float(val)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(num):
        return default
    return num


def safe_int(val: Any, default: int = 0) -> int:
    num = safe_float(val, float(default))
    return int(num)


def optional_float(val: Any) -> Optional[float]:
    """Like safe_float but keeps 'absent' as None instead of zero."""
    if val is None:
        return None
    return safe_float(val)


def flag_set(val: Any) -> bool:
    """GoPlus encodes booleans as "1" / "0" strings."""
    if val is None or isinstance(val, bool):
        return bool(val)
    return str(val).strip() == "1"


def is_renounced(owner_address: Any) -> bool:
    if not owner_address:
        return True
    return str(owner_address).lower() == ZERO_ADDRESS
