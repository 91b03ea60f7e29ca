from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np


@dataclass(frozen=True)
class SimulationDesign:
    n: int
    delta: float = 0.0  # mean(x) - mean(y)
    sd_x: float = 1.0
    sd_y: float = 1.0
    rho: float = 0.5
    missing_x: float = 0.2  # fraction of x values deleted at random
    missing_y: float = 0.2
    name: str = ""

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise ValueError("n must be positive")
        if self.sd_x <= 0 or self.sd_y <= 0:
            raise ValueError("sd_x and sd_y must be positive")
        if not -1.0 <= self.rho <= 1.0:
            raise ValueError("rho must be within [-1, 1]")
        if not (0.0 <= self.missing_x < 1.0 and 0.0 <= self.missing_y < 1.0):
            raise ValueError("missing_x and missing_y must be within [0, 1)")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def designs_from_config(cfg: dict[str, Any]) -> list[SimulationDesign]:
    """
    Expand `simulation` defaults with each entry of `designs`.

    Example:
      simulation: {n: 400, missing_x: 0.1875, missing_y: 0.1875}
      designs:
        - {name: size, delta: 0.0}
        - {name: shift_0.2, delta: 0.2}
    """
    defaults = cfg.get("simulation") or {}
    entries = cfg.get("designs") or [{}]
    allowed = {f.name for f in fields(SimulationDesign)}

    out: list[SimulationDesign] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise TypeError(f"designs[{i}] must be a mapping; got {type(entry).__name__}")
        merged = {**defaults, **entry}
        unknown = set(merged) - allowed
        if unknown:
            raise ValueError(f"Unknown design keys in designs[{i}]: {sorted(unknown)}")
        if "n" not in merged:
            raise ValueError(f"designs[{i}] is missing sample size 'n'")
        merged.setdefault("name", f"design_{i:02d}")
        out.append(SimulationDesign(**merged))
    return out


def simulate_partially_matched(rng: np.random.Generator, design: SimulationDesign) -> tuple[np.ndarray, np.ndarray]:
    """
    Draw n bivariate-normal pairs, then delete a fixed number of x and of y values
    (chosen independently, without replacement). Deleted values are NaN.
    """
    cov_xy = design.rho * design.sd_x * design.sd_y
    cov = np.array([[design.sd_x**2, cov_xy], [cov_xy, design.sd_y**2]], dtype=np.float64)
    xy = rng.multivariate_normal(np.array([design.delta, 0.0]), cov, size=design.n)
    x = xy[:, 0].copy()
    y = xy[:, 1].copy()

    n_missing_x = int(round(design.missing_x * design.n))
    n_missing_y = int(round(design.missing_y * design.n))
    x[rng.choice(design.n, size=n_missing_x, replace=False)] = np.nan
    y[rng.choice(design.n, size=n_missing_y, replace=False)] = np.nan
    return x, y
