from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from _common import bootstrap_src, load_experiment_config


def main() -> None:
    bootstrap_src()

    from partial_pairs.simulation.calibration import rejection_rates
    from partial_pairs.simulation.generate import designs_from_config
    from partial_pairs.utils.artifacts import make_run_paths, save_json
    from partial_pairs.utils.config import options_from_config
    from partial_pairs.utils.experiment import experiment_fingerprint

    p = argparse.ArgumentParser(description="Monte Carlo size/power study of the Ekbohm test vs listwise deletion.")
    p.add_argument("--config", default="configs/simulation/null_calibration.yaml")
    args = p.parse_args()

    cfg = load_experiment_config(args.config)
    exp: dict[str, Any] = cfg["experiment"]
    results_dir = Path(exp.get("results_dir", "results"))
    seed = int(exp.get("seed", 0))
    n_reps = int(exp.get("n_reps", 1000))
    alpha = float(exp.get("alpha", 0.05))

    designs = designs_from_config(cfg)
    options = options_from_config(cfg)
    exp_id, fingerprint = experiment_fingerprint(cfg)
    paths = make_run_paths(results_dir=results_dir, exp_id=exp_id, experiment_name=exp["name"])

    table = rejection_rates(designs, n_reps=n_reps, seed=seed, alpha=alpha, options=options)

    paths.run_dir.mkdir(parents=True, exist_ok=True)
    save_json(paths.config_json, {"exp_id": exp_id, **fingerprint})
    table.to_csv(paths.rejection_csv, index=False)
    save_json(
        paths.summary_json,
        {
            "exp_id": exp_id,
            "n_designs": len(designs),
            "n_reps": n_reps,
            "alpha": alpha,
            "max_ekbohm_rejection_at_null": float(table.loc[table["delta"] == 0.0, "ekbohm_rejection"].max())
            if (table["delta"] == 0.0).any()
            else None,
            "failures": int(table["failures"].sum()),
        },
    )

    print(table.to_string(index=False))
    print(f"Wrote {paths.rejection_csv}")
    print(f"Wrote {paths.summary_json}")


if __name__ == "__main__":
    main()
