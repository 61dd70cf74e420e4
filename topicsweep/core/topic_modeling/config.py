from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Tuple


@dataclass(frozen=True)
class TopicModelConfig:
    backend: Literal["sklearn", "gensim"] = "sklearn"
    random_state: int = 42
    max_iter: int = 50  # sklearn only
    learning_method: Literal["batch", "online"] = "batch"  # sklearn only
    passes: int = 10  # gensim only
    iterations: int = 100  # gensim only
    topn_words: int = 10  # words per topic (summary)


@dataclass(frozen=True)
class SweepConfig:
    k_values: Tuple[int, ...] = (2, 3, 4, 5, 6, 7, 8, 9, 10)
    max_workers: int = 4
    fit_timeout: Optional[float] = None  # seconds per K, None = no limit
