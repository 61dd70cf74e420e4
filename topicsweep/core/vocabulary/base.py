from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

import pandas as pd


class VocabularyFilter(ABC):
    """Port: reduce a tagged token stream to the controlled vocabulary."""

    @abstractmethod
    def apply(self, tokens: pd.DataFrame) -> pd.DataFrame:
        """
        Returns the surviving token rows with an added 'term' column
        (the normalised lemma used as vocabulary key).
        """
        ...

    @abstractmethod
    def vocabulary(self, filtered: pd.DataFrame) -> List[str]: ...
