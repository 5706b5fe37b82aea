"""
source.py — Array Source
=========================
Where arrays come from before anything gets sorted:

    create_random_array(size)         – random values, ids 0..n-1
    parse_custom_array("5, 3, 8")     – user-typed list, filtered + validated
    elements_from_values([5, 3, 8])   – wrap plain numbers as Elements

All randomness in the application lives here.  Trace generation and
playback are deterministic for a given array.
"""

import logging
import random
import re
from typing import Iterable, List, Optional

from elements.element import Element
from elements.errors import ValidationError

logger = logging.getLogger(__name__)


DEFAULT_MIN = 10
DEFAULT_MAX = 300

MAX_ARRAY_SIZE   = 500
CUSTOM_MIN_VALUE = 1
CUSTOM_MAX_VALUE = 500
CUSTOM_MAX_ITEMS = 100

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def create_random_array(
    size: int,
    min_value: int = DEFAULT_MIN,
    max_value: int = DEFAULT_MAX,
    rng: Optional[random.Random] = None,
) -> List[Element]:
    """
    Random array of `size` elements with values in [min_value, max_value).

    Out-of-range arguments are clamped rather than rejected: size to
    1..500, min to >= 0 and <= max, max to >= min + 1.
    """
    rng = rng or random.Random()
    size = max(1, min(MAX_ARRAY_SIZE, int(size)))
    lo   = max(0, min(min_value, max_value))
    hi   = max(lo + 1, max_value)

    return [Element(value=rng.randrange(lo, hi), id=i) for i in range(size)]


def elements_from_values(values: Iterable[float]) -> List[Element]:
    return [Element(value=v, id=i) for i, v in enumerate(values)]


def _parse_int_prefix(token: str) -> Optional[int]:
    # "12abc" -> 12, "3.7" -> 3, "abc" -> None
    match = _INT_PREFIX.match(token)
    return int(match.group(1)) if match else None


def parse_custom_array(text: str) -> List[Element]:
    """
    Parse a comma-separated list typed by the user.

    Entries that are not numbers or fall outside 1..500 are dropped, and
    only the first 100 survivors are kept.  Raises ValidationError when
    nothing usable is left.
    """
    tokens = (text or "").split(",")
    values: List[int] = []
    dropped = 0
    for token in tokens:
        value = _parse_int_prefix(token)
        if value is None or not (CUSTOM_MIN_VALUE <= value <= CUSTOM_MAX_VALUE):
            dropped += 1
            continue
        values.append(value)

    if dropped:
        logger.warning("Dropped %d invalid entr%s from custom input", dropped, "y" if dropped == 1 else "ies")

    if len(values) > CUSTOM_MAX_ITEMS:
        logger.warning("Custom input truncated from %d to %d values", len(values), CUSTOM_MAX_ITEMS)
        values = values[:CUSTOM_MAX_ITEMS]

    if not values:
        raise ValidationError(
            f"Please enter valid numbers between {CUSTOM_MIN_VALUE} and {CUSTOM_MAX_VALUE}."
        )

    return elements_from_values(values)
