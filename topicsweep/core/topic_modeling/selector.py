from __future__ import annotations
from typing import List

from topicsweep.core.topic_modeling.curve import CurvePoint, PerplexityCurve
from topicsweep.utils.exceptions import SweepFailedError


class ModelSelector:
    """Picks K by minimum held-out perplexity; ties go to the smallest K."""

    def rank(self, curve: PerplexityCurve) -> List[CurvePoint]:
        if not curve.points:
            raise SweepFailedError(curve.failures)
        return sorted(curve.points, key=lambda p: (p.perplexity, p.k))

    def select(self, curve: PerplexityCurve) -> int:
        return self.rank(curve)[0].k
