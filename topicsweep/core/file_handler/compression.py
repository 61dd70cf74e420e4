from __future__ import annotations
import gzip

from topicsweep.core.file_handler.base import CompressionBase


class GzipCompression(CompressionBase):
    def __init__(self, compresslevel: int = 6):
        self.compresslevel = compresslevel

    def compress(self, raw_bytes: bytes) -> bytes:
        # mtime=0 keeps the output byte-identical across runs
        return gzip.compress(raw_bytes, compresslevel=self.compresslevel, mtime=0)

    def decompress(self, raw_bytes: bytes) -> bytes:
        return gzip.decompress(raw_bytes)
