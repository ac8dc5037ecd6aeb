"""
ProgressPersistence - Store the learning snapshot in ~/.progressa/learning_progress.json.

Saving and loading never raise. Every outcome is reported as a typed
result so the caller can log it:
- load: OK, MISSING or DECODE_ERROR (the latter two mean "use seed data")
- save: OK, ENCODE_ERROR or WRITE_ERROR (the on-disk copy stays stale)
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from progressa.schemas import ProgressSnapshot

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".progressa"
PROGRESS_FILE_NAME = "learning_progress.json"


class PersistenceStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    DECODE_ERROR = "decode_error"
    ENCODE_ERROR = "encode_error"
    WRITE_ERROR = "write_error"


@dataclass(frozen=True)
class LoadResult:
    status: PersistenceStatus
    snapshot: Optional[ProgressSnapshot] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == PersistenceStatus.OK


@dataclass(frozen=True)
class SaveResult:
    status: PersistenceStatus
    path: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == PersistenceStatus.OK


class ProgressPersistence:
    """
    Read and write the full progress snapshot as a single JSON document.

    The document has three required keys (learningPath, userProgress,
    achievements), camelCase field names and ISO-8601 dates. There is no
    schema version: a document that fails validation is treated as absent.
    """

    def __init__(self, directory: Optional[Path] = None):
        """
        Initialize persistence.

        Args:
            directory: Directory holding the progress file (default: ~/.progressa)
        """
        self.directory = Path(directory) if directory is not None else DEFAULT_PROGRESS_DIR
        self.file_path = self.directory / PROGRESS_FILE_NAME

    def load(self) -> LoadResult:
        """Load the stored snapshot, if any."""
        try:
            if not self.file_path.exists():
                return LoadResult(PersistenceStatus.MISSING)
            text = self.file_path.read_text(encoding="utf-8")
            snapshot = ProgressSnapshot.model_validate_json(text)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            return LoadResult(PersistenceStatus.DECODE_ERROR, error=str(e))

        return LoadResult(PersistenceStatus.OK, snapshot=snapshot)

    def save(self, snapshot: ProgressSnapshot) -> SaveResult:
        """Write the snapshot, replacing any previous copy."""
        try:
            payload = json.dumps(
                snapshot.model_dump(mode="json", by_alias=True),
                indent=2,
                sort_keys=True,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            return SaveResult(PersistenceStatus.ENCODE_ERROR, self.file_path, error=str(e))

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._write_atomic(payload)
        except OSError as e:
            return SaveResult(PersistenceStatus.WRITE_ERROR, self.file_path, error=str(e))

        logger.debug(f"Saved progress to {self.file_path}")
        return SaveResult(PersistenceStatus.OK, self.file_path)

    def _write_atomic(self, payload: str):
        # The previous document stays intact until the new one is complete
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{PROGRESS_FILE_NAME}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.file_path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def clear_all(self):
        """Delete the progress file, and its directory once empty."""
        try:
            if self.file_path.exists():
                self.file_path.unlink()
            if self.directory.is_dir() and not any(self.directory.iterdir()):
                self.directory.rmdir()
        except OSError as e:
            logger.warning(f"Could not clear progress data in {self.directory}: {e}")
