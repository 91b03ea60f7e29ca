from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from partial_pairs.data.pairing import PairedValues
from partial_pairs.inference.errors import DegenerateVarianceError

EPS_FACTOR = 10.0


@dataclass(frozen=True)
class MomentSummary:
    # all observed values of each sample
    mean_x: float
    mean_y: float
    sd_x: float
    sd_y: float
    # matched pairs only
    mean_x_paired: float
    mean_y_paired: float
    sd_x_paired: float
    sd_y_paired: float
    cov_paired: float


def moment_summary(values: PairedValues) -> MomentSummary:
    """
    Sample means, standard deviations (ddof=1) and the paired covariance.

    "All observed" x is paired_x followed by x_only; order does not matter for any
    of the moments.
    """
    all_x = np.concatenate([values.paired_x, values.x_only])
    all_y = np.concatenate([values.paired_y, values.y_only])
    px = values.paired_x
    py = values.paired_y
    if px.size < 2:
        raise ValueError("Need at least 2 matched pairs to estimate the paired covariance")

    return MomentSummary(
        mean_x=float(np.mean(all_x)),
        mean_y=float(np.mean(all_y)),
        sd_x=float(np.std(all_x, ddof=1)),
        sd_y=float(np.std(all_y, ddof=1)),
        mean_x_paired=float(np.mean(px)),
        mean_y_paired=float(np.mean(py)),
        sd_x_paired=float(np.std(px, ddof=1)),
        sd_y_paired=float(np.std(py, ddof=1)),
        cov_paired=float(np.cov(px, py, ddof=1)[0, 1]),
    )


def check_degenerate_variance(m: MomentSummary) -> None:
    """
    Raise DegenerateVarianceError when every spread estimate is below tolerance.

    The gate is a conjunction over all five quantities: a single near-zero spread
    is allowed through.
    """
    eps = EPS_FACTOR * np.finfo(np.float64).eps
    degenerate = (
        m.sd_x < eps * abs(m.mean_x)
        and m.sd_y < eps * abs(m.mean_y)
        and m.sd_x_paired < eps * abs(m.mean_x_paired)
        and m.sd_y_paired < eps * abs(m.mean_y_paired)
        and m.cov_paired < eps * max(abs(m.mean_x_paired), abs(m.mean_y_paired))
    )
    if degenerate:
        raise DegenerateVarianceError("Variance of data is too close to zero")
