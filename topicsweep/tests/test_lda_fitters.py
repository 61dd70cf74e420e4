import math

import pytest

from topicsweep.core.dtm.alignment import align_vocabulary
from topicsweep.core.dtm.builder import DocumentTermMatrixBuilder
from topicsweep.core.frequency.aggregator import FrequencyAggregator
from topicsweep.core.topic_modeling.config import TopicModelConfig
from topicsweep.core.topic_modeling.gensim_lda import GensimLDAFitter
from topicsweep.core.topic_modeling.sklearn_lda import SklearnLDAFitter
from topicsweep.core.topic_modeling.utils import build_fitter
from topicsweep.core.vocabulary.filter import DefaultVocabularyFilter

from conftest import CORPUS, tokens_from


@pytest.fixture
def dtms():
    freqs = FrequencyAggregator().aggregate(DefaultVocabularyFilter().apply(tokens_from(CORPUS)))
    builder = DocumentTermMatrixBuilder()
    train = builder.build(freqs.term_counts, ["d1", "d2", "d3", "d4"])
    test = align_vocabulary(builder.build(freqs.term_counts, ["d5"]), train.vocabulary)
    return train, test


def test_sklearn_fitter_scores_held_out_documents(dtms):
    train, test = dtms
    fitter = SklearnLDAFitter(TopicModelConfig(max_iter=10))
    model = fitter.fit(train, 2)
    score = fitter.perplexity(model, test)
    assert math.isfinite(score) and score > 0


def test_sklearn_fitter_is_seed_deterministic(dtms):
    train, test = dtms
    fitter = SklearnLDAFitter(TopicModelConfig(max_iter=10, random_state=7))
    first = fitter.perplexity(fitter.fit(train, 3), test)
    second = fitter.perplexity(fitter.fit(train, 3), test)
    assert first == pytest.approx(second)


def test_sklearn_fitter_rejects_unaligned_matrix(dtms):
    train, _ = dtms
    other = DocumentTermMatrixBuilder().build(
        FrequencyAggregator()
        .aggregate(DefaultVocabularyFilter().apply(tokens_from({"x": ["ocean", "salmon"]})))
        .term_counts
    )
    fitter = SklearnLDAFitter(TopicModelConfig(max_iter=5))
    with pytest.raises(ValueError):
        fitter.perplexity(fitter.fit(train, 2), other)


def test_sklearn_describe_lists_topics(dtms):
    train, _ = dtms
    fitter = SklearnLDAFitter(TopicModelConfig(max_iter=5))
    topics = fitter.describe(fitter.fit(train, 2), train.vocabulary, topn=3)
    assert [t["topic_id"] for t in topics] == ["0", "1"]
    assert all(len(t["keywords"].split(", ")) == 3 for t in topics)


def test_gensim_fitter_scores_held_out_documents(dtms):
    train, test = dtms
    fitter = GensimLDAFitter(TopicModelConfig(backend="gensim", passes=2, iterations=20))
    model = fitter.fit(train, 2)
    score = fitter.perplexity(model, test)
    assert math.isfinite(score) and score > 0
    topics = fitter.describe(model, train.vocabulary, topn=4)
    assert len(topics) == 2
    assert set(topics[0]["keywords"].split(", ")) <= set(train.vocabulary)


def test_build_fitter_selects_backend():
    assert isinstance(build_fitter(TopicModelConfig(backend="sklearn")), SklearnLDAFitter)
    assert isinstance(build_fitter(TopicModelConfig(backend="gensim")), GensimLDAFitter)
    with pytest.raises(ValueError):
        build_fitter(TopicModelConfig(backend="mallet"))
