from typing import Dict, List

import pandas as pd
import pytest

VOCAB = [
    "fishery",
    "ocean",
    "salmon",
    "stock",
    "harvest",
    "climate",
    "warming",
    "carbon",
    "emission",
    "policy",
]

CORPUS = {
    "d1": ["fishery", "salmon", "stock", "harvest", "fishery", "ocean", "the", "."],
    "d2": ["climate", "warming", "carbon", "emission", "climate", "policy", "and"],
    "d3": ["fishery", "ocean", "salmon", "climate", "warming", "of"],
    "d4": ["carbon", "emission", "policy", "harvest", "stock", "2019"],
    "d5": ["ocean", "salmon", "warming", "carbon", "fishery", "policy", ","],
}


def tokens_from(docs: Dict[str, List[str]]) -> pd.DataFrame:
    rows = []
    for doc_id, lemmas in docs.items():
        for lemma in lemmas:
            pos = "PUNCT" if lemma in {".", ","} else ("NUM" if lemma.isdigit() else "NOUN")
            rows.append(
                {
                    "document_id": doc_id,
                    "surface_form": lemma,
                    "lemma": lemma,
                    "part_of_speech": pos,
                }
            )
    return pd.DataFrame(rows, columns=["document_id", "surface_form", "lemma", "part_of_speech"])


def term_counts_from(rows) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=["document_id", "lemma", "count"])


@pytest.fixture
def corpus_tokens() -> pd.DataFrame:
    return tokens_from(CORPUS)
