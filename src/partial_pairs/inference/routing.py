from __future__ import annotations

from enum import Enum

from partial_pairs.inference.errors import InsufficientDataError, LengthMismatchError

MIN_PRESENT_ON_MISMATCH = 3
MIN_PAIRED = 4
MIN_UNPAIRED = 5


class Route(str, Enum):
    LENGTH_MISMATCH_UNPAIRED = "length_mismatch_unpaired"
    PAIRED_FALLBACK = "paired_fallback"
    UNPAIRED_FALLBACK = "unpaired_fallback"
    EKBOHM = "ekbohm"


def route_mismatched_lengths(n_x: int, n_y: int) -> Route:
    """
    Decide what to do when x and y have different lengths.

    n_x, n_y are the counts of non-missing values. Pairing is meaningless here, so the
    only option is an unpaired test on everything observed.
    """
    if n_x < MIN_PRESENT_ON_MISMATCH or n_y < MIN_PRESENT_ON_MISMATCH:
        raise LengthMismatchError("Sample sizes are too small and length of x should equal length of y")
    return Route.LENGTH_MISMATCH_UNPAIRED


def route_sample_sizes(n1: int, n2: int, n3: int) -> Route:
    """
    Choose between the modified-MLE test and its fallbacks.

    n1 = matched pairs, n2 = x-only, n3 = y-only. The guards are exhaustive and
    mutually exclusive, so each branch can be tested on its own.
    """
    enough_pairs = n1 >= MIN_PAIRED
    enough_unpaired = n2 + n3 >= MIN_UNPAIRED

    if not enough_pairs and not enough_unpaired:
        raise InsufficientDataError("Sample sizes are too small")
    if enough_pairs and not enough_unpaired:
        return Route.PAIRED_FALLBACK
    if not enough_pairs and enough_unpaired:
        return Route.UNPAIRED_FALLBACK
    return Route.EKBOHM
