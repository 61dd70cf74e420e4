import pandas as pd
import pytest

from topicsweep.core.file_handler.codec import CsvCodec
from topicsweep.core.file_handler.compression import GzipCompression
from topicsweep.core.file_handler.storage import LocalStorage
from topicsweep.core.topic_modeling.base import ModelFitter
from topicsweep.schemas.pipeline import SweepPipelineRequest
from topicsweep.services.artifact_cache import ArtifactCache
from topicsweep.services.file_service import FileService
from topicsweep.services.topic_sweep_service import TopicSweepService
from topicsweep.utils.exceptions import EmptyDocumentError, SweepFailedError

from conftest import CORPUS, VOCAB, tokens_from


def _service(cache_dir, **kwargs):
    files = FileService(
        storage=LocalStorage(cache_dir),
        codec=CsvCodec(dtype={"document_id": str, "lemma": str}),
        compression=GzipCompression(),
    )
    return TopicSweepService(ArtifactCache(files), **kwargs)


def _request(**overrides):
    params = dict(
        k_values=[2, 3],
        test_fraction=0.2,
        seed=42,
        backend="sklearn",
        max_iter=10,
        max_workers=2,
        fit_timeout_seconds=None,
        allowed_terms=VOCAB,
    )
    params.update(overrides)
    return SweepPipelineRequest(**params)


def test_end_to_end_sweep_on_synthetic_corpus(tmp_path, corpus_tokens):
    result = _service(tmp_path).run(corpus_tokens, _request())

    assert result.curve.ks == [2, 3]
    assert result.best_k in (2, 3)
    assert result.best_k == result.ranking[0].k
    assert len(result.split.test) == 1
    assert len(result.split.train) == 4
    assert set(result.tfidf["lemma"]) <= set(VOCAB)
    assert list(result.tfidf.columns) == ["document_id", "lemma", "tf", "idf", "tfidf"]
    assert len(result.topics) == result.best_k
    assert result.recomputed is True


def test_recomputation_is_deterministic(tmp_path, corpus_tokens):
    first = _service(tmp_path / "a").run(corpus_tokens, _request())
    second = _service(tmp_path / "b").run(corpus_tokens, _request())

    assert first.split == second.split
    pd.testing.assert_frame_equal(first.tfidf, second.tfidf)
    pd.testing.assert_frame_equal(first.curve.to_frame(), second.curve.to_frame())


def test_cached_artifacts_are_reused(tmp_path, corpus_tokens):
    first = _service(tmp_path).run(corpus_tokens, _request())
    second = _service(tmp_path).run(corpus_tokens, _request())

    assert second.recomputed is False
    assert second.curve.ks == first.curve.ks
    for a, b in zip(first.curve.points, second.curve.points):
        assert a.perplexity == pytest.approx(b.perplexity)
    pd.testing.assert_frame_equal(
        first.tfidf.reset_index(drop=True), second.tfidf, check_exact=False
    )


def test_config_change_triggers_recomputation(tmp_path, corpus_tokens):
    _service(tmp_path).run(corpus_tokens, _request())
    again = _service(tmp_path).run(corpus_tokens, _request(seed=7))
    assert again.recomputed is True


def test_documents_emptied_by_filter_are_reported(tmp_path):
    docs = {**CORPUS, "d6": ["the", "and", "."]}
    result = _service(tmp_path).run(tokens_from(docs), _request())
    assert result.empty_documents == ("d6",)
    assert "d6" not in result.split.train + result.split.test


def test_strict_mode_raises_on_empty_documents(tmp_path):
    docs = {**CORPUS, "d6": ["the", "and", "."]}
    with pytest.raises(EmptyDocumentError) as exc:
        _service(tmp_path).run(tokens_from(docs), _request(strict_documents=True))
    assert exc.value.document_ids == ("d6",)


class _BrokenFitter(ModelFitter):
    def fit(self, dtm, k):
        raise RuntimeError("library exploded")

    def perplexity(self, model, dtm):
        raise AssertionError("unreachable")

    def describe(self, model, vocabulary, topn=10):
        return []


def test_all_k_failing_propagates(tmp_path, corpus_tokens):
    service = _service(tmp_path, fitter_factory=lambda cfg: _BrokenFitter())
    with pytest.raises(SweepFailedError):
        service.run(corpus_tokens, _request())


class _RefitFailsFitter(ModelFitter):
    """Scores every K but cannot fit the full corpus."""

    def __init__(self, n_train_documents):
        self.n_train_documents = n_train_documents

    def fit(self, dtm, k):
        if dtm.n_documents > self.n_train_documents:
            raise RuntimeError("out of memory")
        return k

    def perplexity(self, model, dtm):
        return 100.0 + model

    def describe(self, model, vocabulary, topn=10):
        raise AssertionError("unreachable")


def test_failed_refit_of_best_k_keeps_the_sweep_result(tmp_path, corpus_tokens):
    service = _service(tmp_path, fitter_factory=lambda cfg: _RefitFailsFitter(4))
    result = service.run(corpus_tokens, _request())

    assert result.curve.ks == [2, 3]
    assert result.best_k == 2
    assert result.topics == []
