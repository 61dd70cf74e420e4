from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TaggingConfig:
    text_column: str = "text"
    lowercase: bool = False  # lowercase tokens before tagging (usually False)
    download_missing: bool = True  # fetch NLTK data packages on first use
