from __future__ import annotations

from typing import Any

from partial_pairs.utils.artifacts import experiment_id


def experiment_fingerprint(exp_cfg: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """
    Returns:
      (exp_id, fingerprint_dict)

    exp_id is a stable hash over everything that changes simulation output (seed,
    replicate count, designs, test options), so result directories are reproducible.
    """
    fingerprint = {
        "experiment": {k: v for k, v in exp_cfg.get("experiment", {}).items() if k != "results_dir"},
        "simulation": exp_cfg.get("simulation", {}),
        "designs": exp_cfg.get("designs", []),
        "test": exp_cfg.get("test", {}),
    }
    return experiment_id(fingerprint), fingerprint
