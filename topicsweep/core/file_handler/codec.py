from __future__ import annotations
from io import BytesIO
from typing import Dict, Optional

import pandas as pd

from topicsweep.core.file_handler.base import DataFrameCodecBase


class CsvCodec(DataFrameCodecBase):
    def __init__(self, dtype: Optional[Dict[str, str]] = None, **to_csv_kwargs):
        # dtype pins column types on read, e.g. {"document_id": "string"}
        self._dtype = dtype
        self._to_csv_kwargs = {"index": False, "float_format": "%.17g", **to_csv_kwargs}

    def to_bytes(self, df: pd.DataFrame) -> bytes:
        buf = BytesIO()
        df.to_csv(buf, **self._to_csv_kwargs)
        return buf.getvalue()

    def from_bytes(self, b: bytes) -> pd.DataFrame:
        return pd.read_csv(BytesIO(b), dtype=self._dtype, keep_default_na=False)
