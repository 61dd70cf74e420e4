from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Tuple

import pandas as pd

from topicsweep.core.dtm.builder import DocumentTermMatrixBuilder
from topicsweep.core.dtm.matrix import DocumentTermMatrix
from topicsweep.core.frequency.aggregator import FrequencyAggregator, top_terms
from topicsweep.core.splitting.splitter import CorpusSplitter, Split
from topicsweep.core.tfidf.engine import TfIdfEngine
from topicsweep.core.topic_modeling.base import ModelFitter
from topicsweep.core.topic_modeling.config import TopicModelConfig
from topicsweep.core.topic_modeling.curve import CurvePoint, PerplexityCurve
from topicsweep.core.topic_modeling.selector import ModelSelector
from topicsweep.core.topic_modeling.sweep import TopicModelSweep, validate_k_values
from topicsweep.core.topic_modeling.utils import build_fitter
from topicsweep.core.vocabulary.filter import DefaultVocabularyFilter, check_token_columns
from topicsweep.messages import sweep_messages as msg
from topicsweep.schemas.pipeline import SweepPipelineRequest
from topicsweep.services.artifact_cache import ArtifactCache
from topicsweep.services.hashing import frame_fingerprint
from topicsweep.utils.exceptions import ExternalFitFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SweepResult:
    tfidf: pd.DataFrame  # document_id, lemma, tf, idf, tfidf
    top_terms: pd.DataFrame  # lemma, count (raw frequency view)
    split: Split
    curve: PerplexityCurve
    best_k: int
    ranking: List[CurvePoint]
    topics: List[Dict] = field(default_factory=list)  # summary of the best-K model
    empty_documents: Tuple[Hashable, ...] = ()
    recomputed: bool = True


class TopicSweepService:
    """
    tagged tokens -> vocabulary filter -> frequencies -> TF-IDF
                                                    -> split -> train/test DTMs
                                                    -> K sweep -> selected K

    - TF-IDF table and perplexity curve are compute-or-load artifacts keyed
      on the token fingerprint plus every configuration that shapes them
    - the best K is refitted on the whole corpus to summarise its topics
    """

    def __init__(
        self,
        cache: ArtifactCache,
        fitter_factory: Callable[[TopicModelConfig], ModelFitter] = build_fitter,
        selector: ModelSelector | None = None,
    ):
        self.cache = cache
        self.fitter_factory = fitter_factory
        self.selector = selector or ModelSelector()

    def _describe(
        self,
        fitter: ModelFitter,
        full: DocumentTermMatrix,
        k: int,
        model_cfg: TopicModelConfig,
    ) -> List[Dict]:
        # the curve is already computed; a failed refit only loses the summary
        try:
            model = fitter.fit(full, k)
            return fitter.describe(model, full.vocabulary, topn=model_cfg.topn_words)
        except Exception as e:
            failure = ExternalFitFailure(k, f"{type(e).__name__}: {e}")
            logger.error(msg.TOPICS_SKIPPED.format(error=failure))
            return []

    def run(
        self,
        tokens: pd.DataFrame,
        request: SweepPipelineRequest,
        *,
        describe_best: bool = True,
    ) -> SweepResult:
        check_token_columns(tokens)
        sweep_cfg = request.sweep_config()
        validate_k_values(sweep_cfg.k_values)

        tokens = tokens.assign(document_id=tokens["document_id"].astype(str))
        all_docs = list(dict.fromkeys(tokens["document_id"]))
        aggregator = FrequencyAggregator()

        # coarse frequency view (numeric-like tokens dropped, no stripping)
        freq_filter = DefaultVocabularyFilter(request.frequency_filter_config())
        frequent = top_terms(
            aggregator.aggregate(freq_filter.apply(tokens)), request.top_n_terms
        )

        dtm_filter_cfg = request.dtm_filter_config()
        freqs = aggregator.aggregate(
            DefaultVocabularyFilter(dtm_filter_cfg).apply(tokens), documents=all_docs
        )

        payload = {
            "tokens": frame_fingerprint(tokens),
            "filter": dtm_filter_cfg,
            "strict_documents": request.strict_documents,
        }
        tfidf, tfidf_new = self.cache.compute_or_load(
            "tfidf",
            payload,
            lambda: TfIdfEngine().compute(
                freqs, all_docs if request.strict_documents else None
            ),
            force=request.force,
        )

        split = CorpusSplitter(request.split_config()).split(freqs.documents)
        builder = DocumentTermMatrixBuilder()
        train = builder.build(freqs.term_counts, split.train)
        test = builder.build(freqs.term_counts, split.test)

        model_cfg = request.topic_model_config()
        fitter = self.fitter_factory(model_cfg)

        curve_payload = {
            **payload,
            "split": request.split_config(),
            "model": model_cfg,
            "k_values": list(sweep_cfg.k_values),
            "fit_timeout": sweep_cfg.fit_timeout,
        }
        fresh: Dict[str, PerplexityCurve] = {}

        def _sweep() -> pd.DataFrame:
            logger.info(
                msg.SWEEP_STARTED.format(
                    ks=list(sweep_cfg.k_values),
                    n_train=train.n_documents,
                    n_test=test.n_documents,
                )
            )
            fresh["curve"] = TopicModelSweep(fitter, sweep_cfg).run(train, test)
            return fresh["curve"].to_frame()

        curve_df, curve_new = self.cache.compute_or_load(
            "perplexity_curve", curve_payload, _sweep, force=request.force
        )
        if "curve" in fresh:
            curve = fresh["curve"]
        else:
            loaded = PerplexityCurve.from_frame(curve_df)
            curve = PerplexityCurve(
                points=loaded.points,
                failures={
                    k: "no result in cached curve"
                    for k in sweep_cfg.k_values
                    if k not in loaded.ks
                },
            )

        if curve.failures:
            logger.warning(
                msg.SWEEP_PARTIAL.format(
                    n_failed=len(curve.failures), failed=sorted(curve.failures)
                )
            )

        ranking = self.selector.rank(curve)
        best_k = ranking[0].k
        logger.info(
            msg.SWEEP_COMPLETED.format(best_k=best_k, perplexity=ranking[0].perplexity)
        )

        topics: List[Dict] = []
        if describe_best:
            topics = self._describe(fitter, builder.build(freqs.term_counts), best_k, model_cfg)

        return SweepResult(
            tfidf=tfidf,
            top_terms=frequent,
            split=split,
            curve=curve,
            best_k=best_k,
            ranking=ranking,
            topics=topics,
            empty_documents=freqs.empty_documents,
            recomputed=tfidf_new or curve_new,
        )
