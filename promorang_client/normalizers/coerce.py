"""Total coercion helpers shared by the normalizers.

None of these raise: malformed input always resolves to the given fallback.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

_HTTP_URL_RE = re.compile(r"^https?://", re.IGNORECASE)

Number = int | float


def first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key whose value is not None."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def to_number(value: Any, fallback: Number) -> Number:
    """Coerce to a finite number.

    Booleans become 0/1, numeric strings are parsed (integers stay ``int``),
    and None, NaN, infinities or anything unparsable give ``fallback``.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else fallback
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return fallback
        try:
            return int(text)
        except ValueError:
            pass
        try:
            parsed = float(text)
        except ValueError:
            return fallback
        return parsed if math.isfinite(parsed) else fallback
    return fallback


def to_int(value: Any, fallback: int) -> int:
    return int(to_number(value, fallback))


def to_float(value: Any, fallback: float) -> float:
    return float(to_number(value, fallback))


def to_bool(value: Any) -> bool:
    """Truthiness with NaN counted as false."""
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_text(value: Any, fallback: str) -> str:
    """Strings pass through, scalars are stringified, everything else falls back."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return fallback


def is_http_url(value: Any) -> bool:
    return isinstance(value, str) and bool(_HTTP_URL_RE.match(value.strip()))


def as_mapping(value: Any) -> Mapping[str, Any] | None:
    """The value when it is a mapping, with non-string keys dropped."""
    if not isinstance(value, Mapping):
        return None
    if all(isinstance(key, str) for key in value):
        return value
    return {key: item for key, item in value.items() if isinstance(key, str)}
