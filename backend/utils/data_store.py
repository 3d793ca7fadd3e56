# backend/utils/data_store.py

import contextlib
import io
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Protocol, Union

from services.errors import IOFailure, NotFound, ValidationError

logger = logging.getLogger(__name__)

DATASET_SUFFIX = ".csv"

_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


def validate_dataset_name(name: str) -> str:
    """
    Dataset names are used as a single file name inside the store.
    Anything that could escape the data directory is rejected.
    """
    if not name or name in (".", ".."):
        raise ValidationError(f"Invalid dataset name: {name!r}")
    if any(ch in name for ch in _FORBIDDEN_NAME_CHARS):
        raise ValidationError(f"Dataset name must not contain path separators: {name!r}")
    return name


class DatasetStore(Protocol):
    def put(self, name: str, data: bytes) -> None: ...

    def list(self) -> List[str]: ...

    def open(self, name: str) -> BinaryIO: ...


class DirectoryDatasetStore:
    """
    Flat directory of CSV files, one file per dataset.
    Writes land in a temp file first and are renamed into place,
    so readers only ever see a complete old or new file.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def ensure(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"Cannot create data directory {self.root}: {e}") from e

    def _path(self, name: str) -> Path:
        return self.root / validate_dataset_name(name)

    def put(self, name: str, data: bytes) -> None:
        target = self._path(name)
        self.ensure()

        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".upload-", suffix=".tmp", dir=self.root)
        except OSError as e:
            raise IOFailure(f"Cannot write dataset {name}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, target)
        except OSError as e:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            logger.error("Failed to store dataset %s: %s", name, e)
            raise IOFailure(f"Cannot write dataset {name}: {e}") from e

    def list(self) -> List[str]:
        try:
            with os.scandir(self.root) as entries:
                return [
                    entry.name
                    for entry in entries
                    if entry.name.endswith(DATASET_SUFFIX) and entry.is_file()
                ]
        except OSError as e:
            logger.error("Failed to enumerate %s: %s", self.root, e)
            raise IOFailure(f"Cannot list datasets in {self.root}: {e}") from e

    def open(self, name: str) -> BinaryIO:
        path = self._path(name)
        try:
            return path.open("rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            raise NotFound(name)
        except OSError as e:
            raise IOFailure(f"Cannot read dataset {name}: {e}") from e


class MemoryDatasetStore:
    """In-process store with the same contract. Used by tests."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = {}
        self._lock = threading.Lock()
        for name, data in (initial or {}).items():
            self.put(name, data)

    def put(self, name: str, data: bytes) -> None:
        validate_dataset_name(name)
        with self._lock:
            self._data[name] = bytes(data)

    def list(self) -> List[str]:
        with self._lock:
            return [name for name in self._data if name.endswith(DATASET_SUFFIX)]

    def open(self, name: str) -> BinaryIO:
        validate_dataset_name(name)
        with self._lock:
            if name not in self._data:
                raise NotFound(name)
            return io.BytesIO(self._data[name])
