from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pandas as pd

CURVE_COLUMNS = ["k", "perplexity"]


@dataclass(frozen=True)
class CurvePoint:
    k: int
    perplexity: float


@dataclass(frozen=True)
class PerplexityCurve:
    """
    Ascending-K (K, perplexity) pairs. K values whose fit failed have no
    point; their reason is kept in `failures`.
    """

    points: Tuple[CurvePoint, ...]
    failures: Dict[int, str] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        ks = [p.k for p in self.points]
        if any(b <= a for a, b in zip(ks, ks[1:])):
            raise ValueError(f"Curve points must be in strictly ascending K order: {ks}")

    @property
    def ks(self) -> List[int]:
        return [p.k for p in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "k": pd.Series([p.k for p in self.points], dtype="int64"),
                "perplexity": pd.Series(
                    [p.perplexity for p in self.points], dtype="float64"
                ),
            },
            columns=CURVE_COLUMNS,
        )

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "PerplexityCurve":
        if list(df.columns) != CURVE_COLUMNS:
            raise KeyError(
                f"Perplexity curve columns must be {CURVE_COLUMNS}, got {list(df.columns)}"
            )
        df = df.sort_values("k")
        return cls(
            points=tuple(
                CurvePoint(k=int(r.k), perplexity=float(r.perplexity))
                for r in df.itertuples(index=False)
            )
        )
