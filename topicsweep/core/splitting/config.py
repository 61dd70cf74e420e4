from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SplitConfig:
    test_fraction: float = 0.2
    seed: int = 42
