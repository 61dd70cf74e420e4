from __future__ import annotations

from topicsweep.core.topic_modeling.base import ModelFitter
from topicsweep.core.topic_modeling.config import TopicModelConfig


def build_fitter(cfg: TopicModelConfig) -> ModelFitter:
    if cfg.backend == "gensim":
        from topicsweep.core.topic_modeling.gensim_lda import GensimLDAFitter

        return GensimLDAFitter(cfg)
    if cfg.backend == "sklearn":
        from topicsweep.core.topic_modeling.sklearn_lda import SklearnLDAFitter

        return SklearnLDAFitter(cfg)
    raise ValueError(f"Unknown topic model backend: {cfg.backend!r}")
