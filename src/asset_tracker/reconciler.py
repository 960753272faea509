"""Combine readings from several valuation sources into one balance."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from statistics import fmean

from .parsing import is_valid

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always rounding up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def reconcile(values: Iterable[float | None]) -> int | None:
    """Average the valid readings and round to a whole unit.

    Returns None when no reading is valid, in which case no update
    should be issued.
    """
    present = [v for v in values if is_valid(v)]
    if not present:
        return None

    average = round_half_up(fmean(present))
    logger.debug("Reconciled %s -> %d", present, average)
    return average
