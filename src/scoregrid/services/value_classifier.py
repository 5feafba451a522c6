"""Cell value classification.

Every display string is classified as exactly one of:

- ``DATE``: contains ``M/D H:MMam`` / ``M/D H:MMpm`` (tee times such as
  ``"3/4 10:30am"``). The format has no year; the caller supplies one, falling
  back to ``settings.EVENT_YEAR`` and then the current calendar year.
- ``NUMERIC``: the leading numeric run parses as a float and the whole string
  is a finite number (``"-3"``, ``"1e3"``, ``"0x1A"``). ``"10abc"`` is text.
- ``TEXT``: anything else, compared lower-cased.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from config import settings

__all__ = [
    "ValueKind",
    "ClassifiedValue",
    "classify",
    "is_date",
    "parse_date",
    "is_numeric",
    "parse_float_prefix",
    "resolve_year",
]

DATE_RE = re.compile(r"(\d+)/(\d+) (\d+):(\d+)(am|pm)", re.IGNORECASE)
FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


class ValueKind(str, Enum):
    DATE = "date"
    NUMERIC = "numeric"
    TEXT = "text"


@dataclass(frozen=True)
class ClassifiedValue:
    kind: ValueKind
    value: Union[datetime, float, str]
    folded: str = ""


def resolve_year(year: Optional[int] = None) -> int:
    if year is not None:
        return year
    if settings.EVENT_YEAR is not None:
        return settings.EVENT_YEAR
    return datetime.now().year


def parse_date(text: str, *, year: Optional[int] = None) -> Optional[datetime]:
    """Parse a tee-time string into a datetime, or None when malformed.

    Day values past the end of the month roll into the next month
    (``2/30`` is March 1st or 2nd depending on the year).
    """
    m = DATE_RE.search(text)
    if not m:
        return None
    month, day, hours, minutes = (int(g) for g in m.groups()[:4])
    period = m.group(5).lower()
    if not (1 <= month <= 12 and 1 <= day <= 31 and 1 <= hours <= 12 and 0 <= minutes <= 59):
        return None
    if period == "pm" and hours < 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0
    base = datetime(resolve_year(year), month, 1)
    return base + timedelta(days=day - 1, hours=hours, minutes=minutes)


def is_date(text: str, *, year: Optional[int] = None) -> bool:
    return parse_date(text, year=year) is not None


def parse_float_prefix(text: str) -> Optional[float]:
    """Parse the leading numeric run of ``text``, ignoring whatever trails it."""
    m = FLOAT_PREFIX_RE.match(text.lstrip())
    if not m:
        return None
    return float(m.group(0))


def _is_finite_number(text: str) -> bool:
    s = text.strip()
    if not s:
        return True  # an empty string coerces to 0; the prefix parse rejects it
    if RADIX_RE.fullmatch(s):
        return True
    if DECIMAL_RE.fullmatch(s):
        return math.isfinite(float(s))
    return False


def is_numeric(text: str) -> bool:
    value = parse_float_prefix(text)
    if value is None or math.isnan(value):
        return False
    return _is_finite_number(text)


def classify(text: str, *, year: Optional[int] = None) -> ClassifiedValue:
    text = text.strip()
    folded = text.lower()
    when = parse_date(text, year=year)
    if when is not None:
        return ClassifiedValue(ValueKind.DATE, when, folded)
    if is_numeric(text):
        return ClassifiedValue(ValueKind.NUMERIC, parse_float_prefix(text), folded)  # type: ignore[arg-type]
    return ClassifiedValue(ValueKind.TEXT, folded, folded)
