from __future__ import annotations

import math
import numbers
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd

OptionalSample = list[float | None]


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    missing = pd.isna(value)
    # pd.isna broadcasts over array-likes; a Sample element must be a scalar.
    if not isinstance(missing, (bool, np.bool_)):
        raise TypeError(f"Sample elements must be scalars, got {type(value).__name__}")
    return bool(missing)


def to_optional_sample(values: Iterable[Any]) -> OptionalSample:
    """
    Normalise a sequence of numbers / missing markers into ``float | None`` elements.

    None, NaN, pandas.NA and pandas.NaT are treated as missing. Every other element
    must be a finite real number.
    """
    if isinstance(values, (str, bytes)):
        raise TypeError("Sample must be a sequence of numbers, not a string")

    out: OptionalSample = []
    for i, v in enumerate(values):
        if is_missing(v):
            out.append(None)
            continue
        if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Real):
            raise TypeError(f"Element {i} is not a real number: {v!r}")
        f = float(v)
        if not math.isfinite(f):
            raise ValueError(f"Element {i} is not finite: {v!r}")
        out.append(f)
    return out


def present_values(sample: OptionalSample) -> np.ndarray:
    return np.asarray([v for v in sample if v is not None], dtype=np.float64)


def count_present(sample: OptionalSample) -> int:
    return sum(1 for v in sample if v is not None)
