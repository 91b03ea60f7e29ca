from __future__ import annotations

import hashlib
import json
from typing import Any


def stable_hash(data: Any, *, n_chars: int = 12) -> str:
    if n_chars <= 0:
        raise ValueError("n_chars must be positive")
    dumped = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(dumped.encode("utf-8")).hexdigest()[:n_chars]
