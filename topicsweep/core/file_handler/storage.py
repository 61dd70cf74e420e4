from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Union

from topicsweep.core.file_handler.base import StorageBase

logger = logging.getLogger(__name__)


class LocalStorage(StorageBase):
    """Keys are paths relative to `root` (absolute keys are used as-is)."""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        p = Path(key)
        return p if p.is_absolute() else self.root / p

    def read(self, key: str) -> bytes:
        path = self._path(key)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.exception(f"Read failed: {path}: {e}")
            raise

    def write(self, key: str, data: bytes) -> str:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "wb") as f:
                f.write(data)
            os.replace(tmp, path)
        except OSError as e:
            logger.exception(f"Write failed: {path}: {e}")
            tmp.unlink(missing_ok=True)
            raise
        return str(path)

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()
