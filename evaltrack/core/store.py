"""
Persistent store - one JSON document holding every session and submission

The store owns the canonical in-memory Document. Reads go through
snapshot(); every mutation goes through mutate(), which holds the store
lock for the whole read-modify-persist sequence and rewrites the file
before returning.
"""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from evaltrack.errors import StorageError
from evaltrack.models import Document


logger = logging.getLogger(__name__)


class MemoryDocumentStore:
    """In-memory document with no backing file"""

    def __init__(self):
        self._lock = threading.RLock()
        self.document = Document()

    def load(self) -> Document:
        return self.document

    def save(self) -> None:
        pass

    def snapshot(self) -> Document:
        """Consistent deep copy of the current document"""
        with self._lock:
            return self.document.model_copy(deep=True)

    @contextmanager
    def mutate(self) -> Iterator[Document]:
        """
        Yield the live document for mutation, then persist it

        If the body or the save raises, the document is restored to its
        state before the call and the error propagates.
        """
        with self._lock:
            before = self.document.model_copy(deep=True)
            try:
                yield self.document
                self.save()
            except BaseException:
                self.document = before
                raise


class JsonDocumentStore(MemoryDocumentStore):
    """Document persisted as indented JSON at a file path"""

    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)

    def load(self) -> Document:
        """
        Read the document from disk

        Creates the file with an empty document if it does not exist.
        """
        with self._lock:
            if self.path.exists():
                with open(self.path, 'r', encoding='utf-8') as f:
                    self.document = Document(**json.load(f))
                logger.info(
                    f"📂 Loaded {len(self.document.sessions)} sessions and "
                    f"{len(self.document.submissions)} submissions from {self.path}"
                )
            else:
                self.document = Document()
                self.save()
                logger.info(f"📂 Created empty document at {self.path}")
            return self.document

    def save(self) -> None:
        """Rewrite the whole document (temp file + rename)"""
        payload = json.dumps(self.document.to_wire(), indent=2, ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".db-", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(payload)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"❌ Failed to write {self.path}: {e}")
            raise StorageError(f"Could not save data: {e}") from e
