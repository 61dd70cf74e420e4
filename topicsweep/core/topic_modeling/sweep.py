from __future__ import annotations
import logging
import math
import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Dict, Iterable, Optional, Tuple

from topicsweep.core.dtm.alignment import align_vocabulary
from topicsweep.core.dtm.matrix import DocumentTermMatrix
from topicsweep.core.topic_modeling.base import ModelFitter
from topicsweep.core.topic_modeling.config import SweepConfig
from topicsweep.core.topic_modeling.curve import CurvePoint, PerplexityCurve
from topicsweep.utils.exceptions import (
    ExternalFitFailure,
    InvalidSweepError,
    SweepFailedError,
)

logger = logging.getLogger(__name__)


def validate_k_values(k_values: Iterable[int]) -> Tuple[int, ...]:
    ks = tuple(int(k) for k in k_values)
    if not ks:
        raise InvalidSweepError("Candidate K list is empty")
    if any(k < 1 for k in ks):
        raise InvalidSweepError(f"Every K must be >= 1, got {list(ks)}")
    if any(b <= a for a, b in zip(ks, ks[1:])):
        raise InvalidSweepError(
            f"K values must be strictly ascending without duplicates, got {list(ks)}"
        )
    return ks


class TopicModelSweep:
    """
    Fits one model per candidate K on the training matrix and scores it on
    the evaluation matrix re-aligned to the training vocabulary.

    At most `max_workers` K values are in flight at once; results are merged
    in ascending-K order. A failure, divergence or timeout for one K is
    recorded on the curve and the rest of the sweep carries on.

    `fit_timeout` is measured from the moment a K's fit starts. A fit that
    overruns cannot be interrupted, so its thread is abandoned together with
    the pool that owns it and the K values still waiting go to a fresh pool.
    """

    def __init__(self, fitter: ModelFitter, config: SweepConfig | None = None):
        self.fitter = fitter
        self.cfg = config or SweepConfig()

    def _new_executor(self) -> ThreadPoolExecutor:
        return ThreadPoolExecutor(
            max_workers=self.cfg.max_workers, thread_name_prefix="topic-sweep"
        )

    def _evaluate(
        self,
        train: DocumentTermMatrix,
        test: DocumentTermMatrix,
        k: int,
        started: Dict[int, float],
    ) -> float:
        t0 = started[k] = time.monotonic()
        try:
            model = self.fitter.fit(train, k)
            score = self.fitter.perplexity(model, test)
        except Exception as e:
            raise ExternalFitFailure(k, f"{type(e).__name__}: {e}") from e

        if not math.isfinite(score) or score < 0:
            raise ExternalFitFailure(k, f"diverged (perplexity={score})")

        logger.info(f"K={k} perplexity={score:.4f} | {time.monotonic() - t0:.1f}s")
        return score

    def _wait_budget(
        self, running: Dict[Future, int], started: Dict[int, float]
    ) -> Optional[float]:
        if self.cfg.fit_timeout is None:
            return None
        now = time.monotonic()
        # a K whose thread has not recorded its start yet gets the full budget
        deadlines = [
            started[k] + self.cfg.fit_timeout if k in started else now + self.cfg.fit_timeout
            for k in running.values()
        ]
        return max(0.0, min(deadlines) - now)

    def _overran(self, k: int, started: Dict[int, float]) -> bool:
        if self.cfg.fit_timeout is None or k not in started:
            return False
        return time.monotonic() - started[k] >= self.cfg.fit_timeout

    def run(
        self, train: DocumentTermMatrix, test: DocumentTermMatrix
    ) -> PerplexityCurve:
        ks = validate_k_values(self.cfg.k_values)
        if self.cfg.max_workers < 1:
            raise InvalidSweepError(f"max_workers must be >= 1, got {self.cfg.max_workers}")

        evaluation = align_vocabulary(test, train.vocabulary)

        scores: Dict[int, float] = {}
        failures: Dict[int, str] = {}
        started: Dict[int, float] = {}
        waiting = deque(ks)
        running: Dict[Future, int] = {}

        executor = self._new_executor()
        try:
            while waiting or running:
                while waiting and len(running) < self.cfg.max_workers:
                    k = waiting.popleft()
                    future = executor.submit(self._evaluate, train, evaluation, k, started)
                    running[future] = k

                done, _ = wait(
                    running,
                    timeout=self._wait_budget(running, started),
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    k = running.pop(future)
                    try:
                        scores[k] = future.result()
                    except ExternalFitFailure as e:
                        failures[k] = e.reason
                        logger.error(f"❌ {e}")

                overran = [
                    f for f, k in running.items()
                    if not f.done() and self._overran(k, started)
                ]
                for future in overran:
                    k = running.pop(future)
                    failures[k] = f"timed out after {self.cfg.fit_timeout}s"
                    logger.error(f"❌ K={k}: {failures[k]}")
                if overran:
                    # fits still running in the old pool keep their futures
                    executor.shutdown(wait=False)
                    executor = self._new_executor()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        if not scores:
            raise SweepFailedError(failures)

        return PerplexityCurve(
            points=tuple(CurvePoint(k=k, perplexity=scores[k]) for k in ks if k in scores),
            failures=failures,
        )
