"""Small statistics helpers shared by the detectors.

Money stays in Decimal end to end so equal amounts never drift apart
through float summation. Day intervals are plain integers and go through
numpy.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

import numpy as np


def interval_stats(intervals: Sequence[int]) -> tuple[float, float]:
    """Return (mean, population standard deviation) of day intervals."""
    values = np.asarray(intervals, dtype=float)
    return float(values.mean()), float(values.std(ddof=0))


def amount_stats(amounts: Sequence[Decimal]) -> tuple[Decimal, Decimal]:
    """Return (mean, population standard deviation) of money amounts."""
    count = Decimal(len(amounts))
    mean = sum(amounts, Decimal("0")) / count
    variance = sum(((a - mean) ** 2 for a in amounts), Decimal("0")) / count
    return mean, variance.sqrt()


def round_half_up(value: Decimal | float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
