import math
import re
from typing import Any, Union

_NON_NUMERIC_RE = re.compile(r"[^\d.\-]")


def coerce_number(value: Any) -> Union[int, float, str]:
    """Numbers pass through; '₹ 1,250.50' -> 1250.5; anything unparseable -> ''."""
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return ""

    candidate = _NON_NUMERIC_RE.sub("", str(value))
    try:
        number = float(candidate)
    except ValueError:
        return ""
    if math.isnan(number):
        return ""
    return number
