from __future__ import annotations
from abc import ABC, abstractmethod

import pandas as pd


class TokenTagger(ABC):
    """Port: turn (document_id, text) rows into a tagged token stream."""

    @abstractmethod
    def tag(self, documents: pd.DataFrame) -> pd.DataFrame:
        """
        Returns columns: document_id, surface_form, lemma, part_of_speech
        (one row per token, document order preserved).
        """
        ...
