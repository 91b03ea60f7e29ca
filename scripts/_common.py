from __future__ import annotations

from pathlib import Path
from typing import Any

import sys


def bootstrap_src() -> Path:
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))
    return root


def load_experiment_config(exp_config_path: str | Path) -> dict[str, Any]:
    bootstrap_src()
    from partial_pairs.utils.config import load_yaml

    cfg = load_yaml(exp_config_path)
    exp = cfg.get("experiment")
    if not exp or "name" not in exp:
        raise ValueError("Experiment config must include experiment.name")
    return cfg
