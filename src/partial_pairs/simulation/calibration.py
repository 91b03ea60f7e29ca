from __future__ import annotations

import warnings
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import pandas as pd

from partial_pairs.data.missing import to_optional_sample
from partial_pairs.data.pairing import classify_pairs
from partial_pairs.inference.errors import DegenerateVarianceError, FallbackWarning, InsufficientDataError
from partial_pairs.inference.fallback import paired_t_test
from partial_pairs.inference.partially_matched import PartialMatchOptions, partially_matched_test
from partial_pairs.simulation.generate import SimulationDesign, simulate_partially_matched


def listwise_deletion_pvalue(x: Iterable[Any], y: Iterable[Any], alternative: str = "two.sided") -> float:
    """Paired t-test on complete pairs only, discarding every unmatched value."""
    xs = to_optional_sample(x)
    ys = to_optional_sample(y)
    values = classify_pairs(xs, ys).values(xs, ys)
    return paired_t_test(values.paired_x, values.paired_y, alternative=alternative).pvalue


def run_replicates(
    rng: np.random.Generator,
    design: SimulationDesign,
    *,
    n_reps: int,
    options: PartialMatchOptions | None = None,
) -> pd.DataFrame:
    if n_reps <= 0:
        raise ValueError("n_reps must be positive")
    if options is None:
        options = PartialMatchOptions()

    rows: list[dict[str, Any]] = []
    for rep in range(n_reps):
        x, y = simulate_partially_matched(rng, design)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", FallbackWarning)
            try:
                res = partially_matched_test(x, y, options=options)
                p_ekbohm, route = res.pvalue, res.route.value
            except (InsufficientDataError, DegenerateVarianceError):
                p_ekbohm, route = float("nan"), "failed"
        try:
            p_listwise = listwise_deletion_pvalue(x, y, options.alternative)
        except ValueError:
            p_listwise = float("nan")
        rows.append({"rep": rep, "ekbohm_pvalue": p_ekbohm, "route": route, "listwise_pvalue": p_listwise})
    return pd.DataFrame(rows)


def _rejection_rate(pvalues: pd.Series, alpha: float) -> float:
    valid = pvalues.dropna()
    if valid.empty:
        return float("nan")
    return float((valid < alpha).mean())


def rejection_rates(
    designs: Sequence[SimulationDesign],
    *,
    n_reps: int,
    seed: int,
    alpha: float = 0.05,
    options: PartialMatchOptions | None = None,
) -> pd.DataFrame:
    """
    Monte Carlo rejection rates of the Ekbohm test and of listwise deletion.

    Each design gets its own child seed, so adding or reordering designs does not
    change the draws of the others. With delta == 0 the rate estimates test size.
    """
    if not 0.0 < alpha < 1.0:
        raise ValueError("alpha must be within (0, 1)")

    children = np.random.SeedSequence(seed).spawn(len(designs))
    rows: list[dict[str, Any]] = []
    for design, child in zip(designs, children):
        reps = run_replicates(np.random.default_rng(child), design, n_reps=n_reps, options=options)
        rows.append(
            {
                **design.to_dict(),
                "n_reps": n_reps,
                "alpha": alpha,
                "ekbohm_rejection": _rejection_rate(reps["ekbohm_pvalue"], alpha),
                "listwise_rejection": _rejection_rate(reps["listwise_pvalue"], alpha),
                "ekbohm_route_share": float((reps["route"] == "ekbohm").mean()),
                "failures": int((reps["route"] == "failed").sum()),
            }
        )
    return pd.DataFrame(rows)
