from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import stats

from partial_pairs.inference.ekbohm import validate_alternative
from partial_pairs.inference.errors import DegenerateVarianceError

# R spells the two-sided alternative "two.sided"; scipy spells it "two-sided".
_SCIPY_ALTERNATIVE = {"two.sided": "two-sided", "greater": "greater", "less": "less"}
EPS_FACTOR = 10.0


@dataclass(frozen=True)
class TTestResult:
    statistic: float
    pvalue: float
    df: float
    method: str


def check_constant_data(stderr: float, *means: float) -> None:
    # `<=` so that exactly-zero spread around a zero mean is caught too.
    tol = EPS_FACTOR * np.finfo(np.float64).eps * max(abs(m) for m in means)
    if not stderr > tol:
        raise DegenerateVarianceError("data are essentially constant")


def welch_t_test(a: list[float] | np.ndarray, b: list[float] | np.ndarray, *, alternative: str = "two.sided") -> TTestResult:
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.ndim != 1 or b_arr.ndim != 1:
        raise ValueError("a and b must be 1D")
    if a_arr.size < 2 or b_arr.size < 2:
        raise ValueError("Need at least 2 observations per sample for t-test")
    alt = _SCIPY_ALTERNATIVE[validate_alternative(alternative)]
    stderr = float(np.sqrt(np.var(a_arr, ddof=1) / a_arr.size + np.var(b_arr, ddof=1) / b_arr.size))
    check_constant_data(stderr, float(np.mean(a_arr)), float(np.mean(b_arr)))
    t = stats.ttest_ind(a_arr, b_arr, equal_var=False, alternative=alt)
    return TTestResult(statistic=float(t.statistic), pvalue=float(t.pvalue), df=float(t.df), method="Welch Two Sample t-test")


def paired_t_test(a: list[float] | np.ndarray, b: list[float] | np.ndarray, *, alternative: str = "two.sided") -> TTestResult:
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.shape != b_arr.shape:
        raise ValueError("a and b must have same shape")
    if a_arr.size < 2:
        raise ValueError("Need at least 2 paired samples for t-test")
    alt = _SCIPY_ALTERNATIVE[validate_alternative(alternative)]
    d = a_arr - b_arr
    check_constant_data(float(np.std(d, ddof=1) / np.sqrt(d.size)), float(np.mean(d)))
    t = stats.ttest_rel(a_arr, b_arr, alternative=alt)
    return TTestResult(statistic=float(t.statistic), pvalue=float(t.pvalue), df=float(t.df), method="Paired t-test")
