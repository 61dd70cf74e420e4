from __future__ import annotations
from typing import Dict, List, Sequence

import numpy as np
from gensim import matutils
from gensim.models import LdaModel

from topicsweep.core.dtm.matrix import DocumentTermMatrix
from topicsweep.core.topic_modeling.base import ModelFitter
from topicsweep.core.topic_modeling.config import TopicModelConfig


def _to_corpus(dtm: DocumentTermMatrix) -> List[List]:
    # rows are documents
    return list(matutils.Sparse2Corpus(dtm.matrix, documents_columns=False))


class GensimLDAFitter(ModelFitter):
    """
    gensim LdaModel. Deterministic for a fixed random_state when run in a
    single process (LdaMulticore is not used).
    """

    def __init__(self, cfg: TopicModelConfig | None = None):
        self.cfg = cfg or TopicModelConfig(backend="gensim")

    def fit(self, dtm: DocumentTermMatrix, k: int) -> LdaModel:
        return LdaModel(
            corpus=_to_corpus(dtm),
            id2word=dict(enumerate(dtm.vocabulary)),
            num_topics=k,
            passes=self.cfg.passes,
            iterations=self.cfg.iterations,
            random_state=self.cfg.random_state,
            eval_every=None,
        )

    def perplexity(self, model: LdaModel, dtm: DocumentTermMatrix) -> float:
        if model.num_terms != dtm.n_terms:
            raise ValueError(
                f"Model has {model.num_terms} terms, matrix has {dtm.n_terms}"
            )
        # log_perplexity returns the per-word likelihood bound (base 2)
        bound = model.log_perplexity(_to_corpus(dtm))
        return float(np.exp2(-bound))

    def describe(
        self, model: LdaModel, vocabulary: Sequence[str], topn: int = 10
    ) -> List[Dict]:
        topics: List[Dict] = []
        for i in range(model.num_topics):
            words = [vocabulary[j] for j, _ in model.get_topic_terms(i, topn=topn)]
            topics.append(
                {
                    "topic_id": str(i),
                    "keywords": ", ".join(words),
                    "label": f"Topic {i}",
                }
            )
        return topics
