import math
from decimal import Decimal
from typing import Any


def is_number(value: Any) -> bool:
    """True for int/float/Decimal values that are not bool or NaN."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, Decimal)):
        return True
    return isinstance(value, float) and not math.isnan(value)
