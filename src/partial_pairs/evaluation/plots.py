from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd


def plot_rejection_curve(
    table: pd.DataFrame,
    *,
    title: str,
    out_path: str | Path,
    alpha: float | None = None,
) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if table.empty:
        raise ValueError("Nothing to plot: empty rejection table")

    t = table.sort_values("delta")
    plt.figure(figsize=(7, 4))
    plt.plot(t["delta"], t["ekbohm_rejection"], marker="o", label="Ekbohm MLE", linewidth=1.5)
    plt.plot(t["delta"], t["listwise_rejection"], marker="s", label="listwise deletion", linewidth=1.5)
    if alpha is not None:
        plt.axhline(alpha, color="grey", linestyle="--", linewidth=1.0, label=f"alpha = {alpha:g}")
    plt.xlabel("mean difference")
    plt.ylabel("rejection rate")
    plt.ylim(0.0, 1.0)
    plt.title(title)
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path, dpi=150)
    plt.close()
