from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from partial_pairs.evaluation.plots import plot_rejection_curve
from partial_pairs.utils.artifacts import load_json, make_run_paths, save_json
from partial_pairs.utils.config import load_yaml, options_from_config, save_yaml
from partial_pairs.utils.experiment import experiment_fingerprint
from partial_pairs.utils.hashing import stable_hash


def test_yaml_round_trip_and_options(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    save_yaml({"test": {"alternative": "less", "mismatch_alternative": "requested"}}, path)
    opts = options_from_config(load_yaml(path))
    assert opts.alternative == "less"
    assert opts.mismatch_alternative == "requested"


def test_options_defaults_and_validation() -> None:
    opts = options_from_config({})
    assert opts.alternative == "two.sided"
    assert opts.mismatch_alternative == "two.sided"
    with pytest.raises(ValueError):
        options_from_config({"test": {"alpha": 0.05}})
    with pytest.raises(TypeError):
        options_from_config({"test": ["less"]})


def test_load_yaml_requires_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_yaml(path)
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_yaml(empty) == {}


def test_shipped_configs_parse() -> None:
    root = Path(__file__).resolve().parents[1]
    for path in sorted((root / "configs" / "simulation").glob("*.yaml")):
        cfg = load_yaml(path)
        assert cfg["experiment"]["name"]
        options_from_config(cfg)


def test_fingerprint_ignores_results_dir() -> None:
    a = {"experiment": {"name": "e", "seed": 1, "results_dir": "a"}, "designs": [{"n": 10}]}
    b = {"experiment": {"name": "e", "seed": 1, "results_dir": "b"}, "designs": [{"n": 10}]}
    c = {"experiment": {"name": "e", "seed": 2, "results_dir": "a"}, "designs": [{"n": 10}]}
    assert experiment_fingerprint(a)[0] == experiment_fingerprint(b)[0]
    assert experiment_fingerprint(a)[0] != experiment_fingerprint(c)[0]
    assert stable_hash({"b": 1, "a": 2}) == stable_hash({"a": 2, "b": 1})


def test_run_paths_and_json(tmp_path: Path) -> None:
    paths = make_run_paths(results_dir=tmp_path, exp_id="abc123", experiment_name="size")
    assert paths.run_dir == tmp_path / "experiments" / "size__abc123"
    save_json(paths.summary_json, {"alpha": 0.05})
    assert load_json(paths.summary_json) == {"alpha": 0.05}


def test_plot_rejection_curve_writes_png(tmp_path: Path) -> None:
    table = pd.DataFrame(
        {"delta": [0.0, 0.2, 0.4], "ekbohm_rejection": [0.05, 0.4, 0.9], "listwise_rejection": [0.05, 0.3, 0.8]}
    )
    out = tmp_path / "fig" / "curve.png"
    plot_rejection_curve(table, title="power", out_path=out, alpha=0.05)
    assert out.exists() and out.stat().st_size > 0
