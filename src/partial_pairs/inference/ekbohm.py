from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import stats

from partial_pairs.inference.moments import MomentSummary

ALTERNATIVES: tuple[str, ...] = ("two.sided", "greater", "less")


@dataclass(frozen=True)
class EkbohmParameters:
    r: float
    f_star: float
    g_star: float
    sigma_sq: float
    v1_star: float


def validate_alternative(alternative: str) -> str:
    if alternative not in ALTERNATIVES:
        raise ValueError(f"Unknown alternative: {alternative!r} (expected: two.sided|greater|less)")
    return alternative


def ekbohm_parameters(n1: int, n2: int, n3: int, m: MomentSummary) -> EkbohmParameters:
    """
    Correlation-adjusted pooling weights and variance of Ekbohm's modified MLE.

    See Kuan & Huang (2013), Statistics in Medicine 32(19), for the derivation.
    Degenerate inputs propagate as NaN/inf rather than raising.
    """
    st, sn = np.float64(m.sd_x), np.float64(m.sd_y)
    st1, sn1 = np.float64(m.sd_x_paired), np.float64(m.sd_y_paired)

    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.float64(m.cov_paired) / (st1 * sn1)
        r2 = r**2
        denom = (n1 + n2) * (n1 + n3) - n2 * n3 * r2
        f_star = n1 * (n1 + n3 + n2 * r) / denom
        g_star = n1 * (n1 + n2 + n3 * r) / denom

        sigma_sq = ((n1 - 1) * st1**2 + (n1 - 1) * sn1**2 + (1 + r2) * ((n2 - 1) * st**2 + (n3 - 1) * sn**2)) / (
            2 * (n1 - 1) + (1 + r2) * (n2 + n3 - 2)
        )
        v1_star = sigma_sq * (2 * n1 * (1 - r) + (n2 + n3) * (1 - r2)) / denom

    return EkbohmParameters(
        r=float(r),
        f_star=float(f_star),
        g_star=float(g_star),
        sigma_sq=float(sigma_sq),
        v1_star=float(v1_star),
    )


def ekbohm_statistic(n1: int, n2: int, n3: int, m: MomentSummary) -> tuple[float, EkbohmParameters]:
    params = ekbohm_parameters(n1, n2, n3, m)
    numerator = (
        params.f_star * (m.mean_x_paired - m.mean_x)
        - params.g_star * (m.mean_y_paired - m.mean_y)
        + m.mean_x
        - m.mean_y
    )
    with np.errstate(divide="ignore", invalid="ignore"):
        z = np.float64(numerator) / np.sqrt(np.float64(params.v1_star))
    return float(z), params


def t_tail_pvalue(statistic: float, df: float, alternative: str = "two.sided") -> float:
    alternative = validate_alternative(alternative)
    if alternative == "greater":
        return float(stats.t.sf(statistic, df))
    if alternative == "less":
        return float(stats.t.cdf(statistic, df))
    return float(2.0 * stats.t.sf(abs(statistic), df))
