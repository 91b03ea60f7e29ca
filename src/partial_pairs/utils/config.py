from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from partial_pairs.inference.partially_matched import PartialMatchOptions


def load_yaml(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"Expected YAML mapping at {path}, got {type(data).__name__}")
    return data


def save_yaml(data: dict[str, Any], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=True)


def options_from_config(cfg: dict[str, Any]) -> PartialMatchOptions:
    """Build test options from the optional `test:` mapping of a config."""
    test_cfg = cfg.get("test") or {}
    if not isinstance(test_cfg, dict):
        raise TypeError(f"test config must be a mapping; got {type(test_cfg).__name__}")
    unknown = set(test_cfg) - {"alternative", "mismatch_alternative"}
    if unknown:
        raise ValueError(f"Unknown test config keys: {sorted(unknown)}")
    return PartialMatchOptions(
        alternative=str(test_cfg.get("alternative", "two.sided")),
        mismatch_alternative=str(test_cfg.get("mismatch_alternative", "two.sided")),
    )
