from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from partial_pairs.utils.hashing import stable_hash


@dataclass(frozen=True)
class RunPaths:
    run_dir: Path
    config_json: Path
    summary_json: Path
    rejection_csv: Path


def experiment_id(config: dict[str, Any]) -> str:
    return stable_hash(config, n_chars=12)


def make_run_paths(*, results_dir: str | Path, exp_id: str, experiment_name: str) -> RunPaths:
    run_dir = Path(results_dir) / "experiments" / f"{experiment_name}__{exp_id}"
    return RunPaths(
        run_dir=run_dir,
        config_json=run_dir / "config.json",
        summary_json=run_dir / "summary.json",
        rejection_csv=run_dir / "rejection_rates.csv",
    )


def save_json(path: str | Path, obj: dict[str, Any]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, sort_keys=True, default=str)


def load_json(path: str | Path) -> dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))
