from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

from _common import bootstrap_src, load_experiment_config


def _fmt_rate(rate: float, n_reps: int) -> str:
    # Monte Carlo standard error of a proportion
    se = (rate * (1.0 - rate) / n_reps) ** 0.5 if n_reps > 0 else float("nan")
    return f"{rate:.3f} ({se:.3f})"


def main() -> None:
    bootstrap_src()

    from partial_pairs.evaluation.plots import plot_rejection_curve
    from partial_pairs.utils.artifacts import make_run_paths
    from partial_pairs.utils.experiment import experiment_fingerprint

    p = argparse.ArgumentParser(description="Build rejection-rate tables and figures from simulation artifacts.")
    p.add_argument("--config", default="configs/simulation/null_calibration.yaml")
    args = p.parse_args()

    cfg = load_experiment_config(args.config)
    exp = cfg["experiment"]
    results_dir = Path(exp.get("results_dir", "results"))
    experiment_name = exp["name"]

    exp_id, _fingerprint = experiment_fingerprint(cfg)
    paths = make_run_paths(results_dir=results_dir, exp_id=exp_id, experiment_name=experiment_name)
    if not paths.rejection_csv.exists():
        raise SystemExit(f"Missing {paths.rejection_csv}. Run `python scripts/01_run_simulation.py --config {args.config}` first.")

    table = pd.read_csv(paths.rejection_csv)

    tables_dir = results_dir / "tables"
    figures_dir = results_dir / "figures"
    tables_dir.mkdir(parents=True, exist_ok=True)
    figures_dir.mkdir(parents=True, exist_ok=True)

    out = table[["name", "n", "delta", "rho", "missing_x", "missing_y"]].copy()
    out["ekbohm"] = [_fmt_rate(r, n) for r, n in zip(table["ekbohm_rejection"], table["n_reps"])]
    out["listwise"] = [_fmt_rate(r, n) for r, n in zip(table["listwise_rejection"], table["n_reps"])]
    out["ekbohm_route_share"] = table["ekbohm_route_share"].round(3)

    table_path = tables_dir / f"{experiment_name}__{exp_id}__rejection_table.csv"
    out.to_csv(table_path, index=False)
    print(f"Wrote {table_path}")

    # One curve per (n, rho, missingness) setting, rejection rate against delta.
    group_cols = ["n", "rho", "missing_x", "missing_y"]
    for key, g in table.groupby(group_cols):
        n, rho, mx, my = key
        if g["delta"].nunique() < 2:
            continue
        fig_path = figures_dir / f"{experiment_name}__{exp_id}__n{n}_rho{rho:g}_mx{mx:g}_my{my:g}.png"
        plot_rejection_curve(
            g,
            title=f"{experiment_name}: n={n}, rho={rho:g}, missing={mx:g}/{my:g}",
            out_path=fig_path,
            alpha=float(g["alpha"].iloc[0]),
        )
        print(f"Wrote {fig_path}")


if __name__ == "__main__":
    main()
