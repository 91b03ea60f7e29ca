"""
Ekbohm's MLE-based test for partially matched samples under homoscedasticity.

x and y are aligned by index; each element is a real number or a missing marker.
Indices observed in both samples form matched pairs, the rest contribute as
unpaired data. Ekbohm's modified maximum likelihood estimator combines both, and
under the null hypothesis its statistic Z_E approximately follows a t distribution
with n1 (number of matched pairs) degrees of freedom.

When the sample-size conditions for the modified test are not met, a paired or
Welch two-sample t-test is substituted and a FallbackWarning is emitted.

Reference: Kuan, P. F. & Huang, B. (2013). A simple and robust method for partially
matched samples using the p-values pooling approach. Statistics in Medicine 32(19).
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

from partial_pairs.data.missing import count_present, present_values, to_optional_sample
from partial_pairs.data.pairing import classify_pairs
from partial_pairs.inference.ekbohm import EkbohmParameters, ekbohm_statistic, t_tail_pvalue, validate_alternative
from partial_pairs.inference.errors import FallbackWarning, InsufficientDataError
from partial_pairs.inference.fallback import paired_t_test, welch_t_test
from partial_pairs.inference.moments import MomentSummary, check_degenerate_variance, moment_summary
from partial_pairs.inference.routing import Route, route_mismatched_lengths, route_sample_sizes

MISMATCH_ALTERNATIVES = ("two.sided", "requested")


@dataclass(frozen=True)
class PartialMatchOptions:
    alternative: str = "two.sided"
    # "two.sided": the length-mismatch fallback ignores `alternative` and always
    # reports a two-sided p-value. "requested" honours `alternative` there too.
    mismatch_alternative: Literal["two.sided", "requested"] = "two.sided"

    def __post_init__(self) -> None:
        validate_alternative(self.alternative)
        if self.mismatch_alternative not in MISMATCH_ALTERNATIVES:
            raise ValueError(
                f"Unknown mismatch_alternative: {self.mismatch_alternative!r} (expected: two.sided|requested)"
            )


@dataclass(frozen=True)
class PartialMatchResult:
    pvalue: float
    statistic: float
    df: float
    alternative: str
    route: Route
    method: str
    n1: int
    n2: int
    n3: int  # on the length-mismatch route n2/n3 count all observed x/y values
    moments: MomentSummary | None = None
    parameters: EkbohmParameters | None = None
    warning: str | None = None


# Frames between warnings.warn and the user: _fallback_warning, _run_test, public entry point.
_USER_STACKLEVEL = 4


def _fallback_warning(message: str) -> str:
    warnings.warn(FallbackWarning(message), stacklevel=_USER_STACKLEVEL)
    return message


def partially_matched_test(
    x: Iterable[Any],
    y: Iterable[Any],
    alternative: str | None = None,
    *,
    options: PartialMatchOptions | None = None,
) -> PartialMatchResult:
    return _run_test(x, y, alternative, options)


def _run_test(
    x: Iterable[Any],
    y: Iterable[Any],
    alternative: str | None,
    options: PartialMatchOptions | None,
) -> PartialMatchResult:
    if options is None:
        options = PartialMatchOptions()
    alternative = validate_alternative(options.alternative if alternative is None else alternative)

    xs = to_optional_sample(x)
    ys = to_optional_sample(y)

    if len(xs) != len(ys):
        n_x, n_y = count_present(xs), count_present(ys)
        route = route_mismatched_lengths(n_x, n_y)
        msg = _fallback_warning("Length of x should equal length of y. Two sample t-test attempted")
        alt = alternative if options.mismatch_alternative == "requested" else "two.sided"
        res = welch_t_test(present_values(xs), present_values(ys), alternative=alt)
        return PartialMatchResult(
            pvalue=res.pvalue,
            statistic=res.statistic,
            df=res.df,
            alternative=alt,
            route=route,
            method=res.method,
            n1=0,
            n2=n_x,
            n3=n_y,
            warning=msg,
        )

    pairs = classify_pairs(xs, ys)
    n1, n2, n3 = pairs.n1, pairs.n2, pairs.n3
    route = route_sample_sizes(n1, n2, n3)
    values = pairs.values(xs, ys)

    if route is Route.PAIRED_FALLBACK:
        msg = _fallback_warning("Not enough missing data for modified t-test. Matched pairs t-test attempted")
        res = paired_t_test(values.paired_x, values.paired_y, alternative=alternative)
        return PartialMatchResult(
            pvalue=res.pvalue,
            statistic=res.statistic,
            df=res.df,
            alternative=alternative,
            route=route,
            method=res.method,
            n1=n1,
            n2=n2,
            n3=n3,
            warning=msg,
        )

    if route is Route.UNPAIRED_FALLBACK:
        if n2 < 2 or n3 < 2:
            raise InsufficientDataError(f"Not enough x-only ({n2}) or y-only ({n3}) observations for a two sample t-test")
        msg = _fallback_warning("Not enough matched pairs for modified t-test. Two sample t-test attempted")
        res = welch_t_test(values.x_only, values.y_only, alternative=alternative)
        return PartialMatchResult(
            pvalue=res.pvalue,
            statistic=res.statistic,
            df=res.df,
            alternative=alternative,
            route=route,
            method=res.method,
            n1=n1,
            n2=n2,
            n3=n3,
            warning=msg,
        )

    moments = moment_summary(values)
    check_degenerate_variance(moments)
    z, params = ekbohm_statistic(n1, n2, n3, moments)
    return PartialMatchResult(
        pvalue=t_tail_pvalue(z, n1, alternative),
        statistic=z,
        df=float(n1),
        alternative=alternative,
        route=route,
        method="Ekbohm's MLE-based test under homoscedasticity",
        n1=n1,
        n2=n2,
        n3=n3,
        moments=moments,
        parameters=params,
    )


def ekbohm_mle_test(x: Iterable[Any], y: Iterable[Any], alternative: str = "two.sided") -> float:
    """Return only the p-value of partially_matched_test."""
    return _run_test(x, y, alternative, None).pvalue
