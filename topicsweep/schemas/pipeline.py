from dataclasses import replace
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from topicsweep.core.config import settings
from topicsweep.core.splitting.config import SplitConfig
from topicsweep.core.topic_modeling.config import SweepConfig, TopicModelConfig
from topicsweep.core.topic_modeling.sweep import validate_k_values
from topicsweep.core.vocabulary.config import DTM_FILTER, FREQUENCY_FILTER, VocabularyFilterConfig


class SweepPipelineRequest(BaseModel):
    tokens_path: Optional[str] = None
    documents_path: Optional[str] = None  # raw (document_id, text) rows, tagged with NLTK
    text_column: str = "text"
    output_dir: str = Field(default_factory=lambda: settings.OUTPUT_DIR)
    cache_dir: str = Field(default_factory=lambda: settings.CACHE_DIR)

    test_fraction: float = Field(default_factory=lambda: settings.TEST_FRACTION)
    seed: int = Field(default_factory=lambda: settings.RANDOM_SEED)
    k_values: List[int] = Field(default_factory=lambda: list(settings.K_VALUES))

    backend: Literal["sklearn", "gensim"] = Field(
        default_factory=lambda: settings.TOPIC_BACKEND
    )
    max_iter: int = Field(default_factory=lambda: settings.LDA_MAX_ITER, ge=1)
    passes: int = Field(default_factory=lambda: settings.LDA_PASSES, ge=1)
    max_workers: int = Field(default_factory=lambda: settings.MAX_WORKERS, ge=1)
    fit_timeout_seconds: Optional[float] = Field(
        default_factory=lambda: settings.FIT_TIMEOUT_SECONDS
    )

    stopword_source: Literal["sklearn", "nltk"] = "sklearn"
    custom_stopwords: List[str] = []
    exclude_stopwords: List[str] = []
    allowed_terms: Optional[List[str]] = None

    top_n_terms: int = Field(default=20, ge=1)
    topn_words: int = Field(default=10, ge=1)
    strict_documents: bool = False  # raise on documents emptied by the filter
    force: bool = False  # ignore cached artifacts

    @field_validator("k_values")
    @classmethod
    def _check_k_values(cls, v: List[int]) -> List[int]:
        return list(validate_k_values(v))

    @field_validator("test_fraction")
    @classmethod
    def _check_test_fraction(cls, v: float) -> float:
        if not 0 < v < 1:
            raise ValueError(f"test_fraction must be strictly between 0 and 1, got {v}")
        return v

    def _filter(self, preset: VocabularyFilterConfig) -> VocabularyFilterConfig:
        return replace(
            preset,
            stopword_source=self.stopword_source,
            custom_stopwords=frozenset(self.custom_stopwords),
            exclude_stopwords=frozenset(self.exclude_stopwords),
            allowed_terms=(
                frozenset(self.allowed_terms) if self.allowed_terms is not None else None
            ),
        )

    def dtm_filter_config(self) -> VocabularyFilterConfig:
        return self._filter(DTM_FILTER)

    def frequency_filter_config(self) -> VocabularyFilterConfig:
        return self._filter(FREQUENCY_FILTER)

    def split_config(self) -> SplitConfig:
        return SplitConfig(test_fraction=self.test_fraction, seed=self.seed)

    def topic_model_config(self) -> TopicModelConfig:
        return TopicModelConfig(
            backend=self.backend,
            random_state=self.seed,
            max_iter=self.max_iter,
            passes=self.passes,
            topn_words=self.topn_words,
        )

    def sweep_config(self) -> SweepConfig:
        return SweepConfig(
            k_values=tuple(self.k_values),
            max_workers=self.max_workers,
            fit_timeout=self.fit_timeout_seconds,
        )
