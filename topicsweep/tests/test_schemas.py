import pytest
from pydantic import ValidationError

from topicsweep.core.config import Settings
from topicsweep.core.vocabulary.config import DTM_FILTER, FREQUENCY_FILTER
from topicsweep.schemas.pipeline import SweepPipelineRequest


def test_request_builds_stage_configs():
    request = SweepPipelineRequest(
        k_values=[2, 4],
        seed=7,
        test_fraction=0.25,
        custom_stopwords=["study"],
        allowed_terms=["ocean"],
        fit_timeout_seconds=30,
    )

    dtm_cfg = request.dtm_filter_config()
    freq_cfg = request.frequency_filter_config()
    assert dtm_cfg.strip_non_alpha == DTM_FILTER.strip_non_alpha
    assert freq_cfg.drop_numeric == FREQUENCY_FILTER.drop_numeric
    assert dtm_cfg != freq_cfg
    assert dtm_cfg.custom_stopwords == frozenset({"study"})
    assert freq_cfg.allowed_terms == frozenset({"ocean"})

    assert request.split_config().seed == 7
    assert request.split_config().test_fraction == 0.25
    assert request.topic_model_config().random_state == 7
    assert request.sweep_config().k_values == (2, 4)
    assert request.sweep_config().fit_timeout == 30


@pytest.mark.parametrize("k_values", [[], [3, 2], [2, 2], [0, 1]])
def test_request_rejects_bad_k_values(k_values):
    with pytest.raises(ValidationError):
        SweepPipelineRequest(k_values=k_values)


@pytest.mark.parametrize("fraction", [0, 1, -0.1, 1.5])
def test_request_rejects_bad_test_fraction(fraction):
    with pytest.raises(ValidationError):
        SweepPipelineRequest(test_fraction=fraction)


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("K_VALUES", "[3, 5, 8]")
    monkeypatch.setenv("TOPIC_BACKEND", "gensim")
    monkeypatch.setenv("FIT_TIMEOUT_SECONDS", "12.5")

    s = Settings()
    assert s.K_VALUES == [3, 5, 8]
    assert s.TOPIC_BACKEND == "gensim"
    assert s.FIT_TIMEOUT_SECONDS == 12.5
    assert s.RANDOM_SEED == 42
