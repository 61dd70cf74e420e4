from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Tuple

import pandas as pd

from topicsweep.messages import sweep_messages as msg
from topicsweep.services.file_service import FileService
from topicsweep.services.hashing import cache_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactCache:
    """
    Compute-or-load for DataFrame artifacts. The key is derived from the
    payload (input fingerprints + configuration), so any change of inputs or
    config lands on a new key and triggers recomputation.
    """

    files: FileService
    prefix: str = "cache"

    def key_for(self, name: str, payload: Any) -> str:
        return f"{self.prefix}/{name}_{cache_key(name, payload)[:16]}.csv.gz"

    def compute_or_load(
        self,
        name: str,
        payload: Any,
        compute: Callable[[], pd.DataFrame],
        *,
        force: bool = False,
    ) -> Tuple[pd.DataFrame, bool]:
        """Returns (frame, recomputed)."""
        key = self.key_for(name, payload)
        if not force and self.files.exists(key):
            logger.info(f"♻️ {msg.ARTIFACT_REUSED.format(name=name, key=key)}")
            return self.files.read_df(key), False

        df = compute()
        self.files.write_df(df, key)
        logger.info(f"✅ {msg.ARTIFACT_STORED.format(name=name, key=key)}")
        return df, True
