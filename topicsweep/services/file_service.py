from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from topicsweep.core.file_handler.base import (
    StorageBase,
    CompressionBase,
    DataFrameCodecBase,
)


@dataclass(slots=True)
class FileService:
    """
    High-level file I/O service that:
      - reads/writes raw bytes or DataFrames through a StorageBase
      - (de)compresses transparently when a CompressionBase is provided
      - infers compression from the key when auto_by_extension=True (*.gz)
    """

    storage: StorageBase
    codec: DataFrameCodecBase
    compression: Optional[CompressionBase] = None
    auto_by_extension: bool = True

    def _is_compressed_key(self, key: str) -> bool:
        return self.auto_by_extension and key.lower().endswith(".gz")

    # ------------- raw bytes API -------------

    def read_raw(self, key: str) -> bytes:
        data = self.storage.read(key)
        if self.compression and self._is_compressed_key(key):
            data = self.compression.decompress(data)
        return data

    def write_raw(self, data: bytes, key: str) -> str:
        """
        Compress when a CompressionBase is configured and the key looks
        compressed.

        Returns: resolved location
        """
        if self.compression and self._is_compressed_key(key):
            data = self.compression.compress(data)
        return self.storage.write(key, data)

    def exists(self, key: str) -> bool:
        return self.storage.exists(key)

    # ------------- DataFrame API -------------

    def read_df(self, key: str) -> pd.DataFrame:
        return self.codec.from_bytes(self.read_raw(key))

    def write_df(self, df: pd.DataFrame, key: str) -> str:
        return self.write_raw(self.codec.to_bytes(df), key)
