from __future__ import annotations
from typing import Dict, Hashable, Iterable, Optional


class TopicSweepError(Exception):
    """Base class for domain errors raised by topicsweep."""


class EmptyDocumentError(TopicSweepError):
    """A document has no surviving tokens where a term frequency is required."""

    def __init__(self, document_ids: Iterable[Hashable], message: Optional[str] = None):
        self.document_ids = tuple(document_ids)
        super().__init__(
            message
            or f"Documents with zero filtered tokens: {list(self.document_ids)}"
        )


class InvalidSplitError(TopicSweepError, ValueError):
    """Train/test partition cannot be drawn with the given parameters."""

    def __init__(self, test_fraction: float, n_documents: int, reason: str):
        self.test_fraction = test_fraction
        self.n_documents = n_documents
        super().__init__(
            f"{reason} (test_fraction={test_fraction}, n_documents={n_documents})"
        )


class InvalidSweepError(TopicSweepError, ValueError):
    """Candidate K list is empty, unordered, duplicated or below 1."""


class VocabularyAlignmentError(TopicSweepError):
    """Evaluation matrix has no counts left after alignment to the training vocabulary."""


class ExternalFitFailure(TopicSweepError):
    """The modeling backend failed, timed out or diverged for one K."""

    def __init__(self, k: int, reason: str):
        self.k = k
        self.reason = reason
        super().__init__(f"K={k}: {reason}")


class SweepFailedError(TopicSweepError):
    """No K in the sweep produced a usable perplexity."""

    def __init__(self, failures: Dict[int, str]):
        self.failures = dict(failures)
        detail = "; ".join(f"K={k}: {r}" for k, r in sorted(self.failures.items()))
        super().__init__(f"Every K in the sweep failed. {detail}".strip())


class VocabularyMismatchWarning(UserWarning):
    """Evaluation matrix columns differ from the training vocabulary."""

    def __init__(self, missing: Iterable[str], extra: Iterable[str]):
        self.missing = tuple(missing)  # train terms zero-filled in the evaluation matrix
        self.extra = tuple(extra)  # evaluation terms dropped
        super().__init__(
            f"Vocabulary mismatch: {len(self.missing)} training terms zero-filled, "
            f"{len(self.extra)} unseen terms dropped"
        )
