# topicsweep/services/hashing.py

import dataclasses
import hashlib
import json
from typing import Any

import pandas as pd


def compute_sha256(content: bytes) -> str:
    """Returns SHA256 hash of the content."""
    return hashlib.sha256(content).hexdigest()


def frame_fingerprint(df: pd.DataFrame) -> str:
    # row order and column names are part of the identity
    row_hashes = pd.util.hash_pandas_object(df, index=False).to_numpy()
    header = "|".join(map(str, df.columns)).encode("utf-8")
    return compute_sha256(header + row_hashes.tobytes())


def _jsonable(x: Any) -> Any:
    if dataclasses.is_dataclass(x) and not isinstance(x, type):
        return {k: _jsonable(v) for k, v in dataclasses.asdict(x).items()}
    if isinstance(x, dict):
        return {str(k): _jsonable(v) for k, v in x.items()}
    if isinstance(x, (set, frozenset)):
        return sorted(_jsonable(v) for v in x)
    if isinstance(x, (list, tuple)):
        return [_jsonable(v) for v in x]
    return x


def config_json(cfg: Any) -> str:
    """Canonical JSON for a config dataclass / dict (sets sorted, keys sorted)."""
    return json.dumps(_jsonable(cfg), sort_keys=True, default=str)


def cache_key(*parts: Any) -> str:
    return compute_sha256("\n".join(config_json(p) for p in parts).encode("utf-8"))
