from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Hashable, Iterable, Tuple

import numpy as np

from topicsweep.core.splitting.config import SplitConfig
from topicsweep.utils.exceptions import InvalidSplitError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Split:
    train: Tuple[Hashable, ...]
    test: Tuple[Hashable, ...]
    test_fraction: float
    seed: int


class CorpusSplitter:
    """
    Draws ceil(f * N) test documents uniformly without replacement.
    Ids are de-duplicated and sorted before sampling and numpy's PCG64
    generator is seeded, so a fixed (seed, f, document set) gives the same
    partition on every run and platform.
    """

    def __init__(self, config: SplitConfig | None = None):
        self.cfg = config or SplitConfig()

    def split(self, document_ids: Iterable[Hashable]) -> Split:
        f = self.cfg.test_fraction
        docs = sorted(set(document_ids))
        n = len(docs)

        if not 0 < f < 1:
            raise InvalidSplitError(f, n, "test_fraction must be strictly between 0 and 1")
        if n < 2:
            raise InvalidSplitError(f, n, "at least 2 documents are required")

        # round first: 0.3 * 10 == 3.0000000000000004
        n_test = math.ceil(round(f * n, 9))
        if n_test >= n:
            raise InvalidSplitError(f, n, "test set would leave no training documents")

        rng = np.random.default_rng(self.cfg.seed)
        picked = set(rng.choice(n, size=n_test, replace=False).tolist())

        test = tuple(d for i, d in enumerate(docs) if i in picked)
        train = tuple(d for i, d in enumerate(docs) if i not in picked)

        logger.info(
            f"Split {n} documents: {len(train)} train / {len(test)} test "
            f"(f={f}, seed={self.cfg.seed})"
        )
        return Split(train=train, test=test, test_fraction=f, seed=self.cfg.seed)
