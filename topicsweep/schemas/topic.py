from typing import Dict, List, Optional

from pydantic import BaseModel


class TopicSummary(BaseModel):
    topic_id: str
    keywords: str
    label: str


class CurvePointSchema(BaseModel):
    k: int
    perplexity: float


class SweepSummary(BaseModel):
    best_k: int
    curve: List[CurvePointSchema]
    failures: Dict[int, str] = {}
    topics: List[TopicSummary] = []
    n_documents: int
    n_train: int
    n_test: int
    empty_documents: List[str] = []
    tfidf_path: Optional[str] = None
    curve_path: Optional[str] = None
    recomputed: bool
