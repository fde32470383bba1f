# shopfront/repositories/local_store.py
"""
JSON file store used in local mode and as the fallback for the remote store.

File layout:
  - wrapper_key set   -> {"<wrapper_key>": [ ...documents... ]}
  - wrapper_key None  -> [ ...documents... ]

Every mutation is read-modify-write of the whole file. Mutations are
serialized by a per-file lock and the file is replaced atomically
(temp file + rename), so concurrent requests in one process cannot
interleave partial writes.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from shopfront.core.errors import StoreError
from shopfront.core.responses import to_json_safe
from shopfront.repositories.store import Document, Store, utc_now_iso

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.RLock()
        return lock


def _atomic_write(path: Path, payload: Any) -> None:
    """Atomically write JSON to the target path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w", dir=str(path.parent), delete=False, encoding="utf-8", suffix=".tmp"
    ) as tf:
        json.dump(payload, tf, indent=2, ensure_ascii=False)
        temp_path = Path(tf.name)
    try:
        os.replace(temp_path, path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


class LocalFileStore(Store):
    def __init__(self, path: Path, *, wrapper_key: str | None = None, name: str = ""):
        self.path = Path(path)
        self.wrapper_key = wrapper_key
        self.name = name or self.path.stem
        self._lock = _lock_for(self.path)

    # ----- File I/O -----

    def _read(self) -> list[Document]:
        """
        Load all documents.

        Missing file => empty collection. A file that exists but cannot be
        parsed raises StoreError instead of being treated as empty, so the
        next write does not wipe it.
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logger.error("Cannot read local store %s: %s", self.path, exc)
            raise StoreError(f"Cannot read {self.path}: {exc}") from exc

        if self.wrapper_key is not None:
            if not isinstance(raw, dict):
                raise StoreError(f"{self.path}: expected an object with '{self.wrapper_key}'")
            raw = raw.get(self.wrapper_key, [])
        if not isinstance(raw, list):
            raise StoreError(f"{self.path}: expected a list of documents")
        return raw

    def _write(self, documents: list[Document]) -> None:
        payload: Any = documents
        if self.wrapper_key is not None:
            payload = {self.wrapper_key: documents}
        try:
            _atomic_write(self.path, to_json_safe(payload))
        except OSError as exc:
            logger.error("Cannot write local store %s: %s", self.path, exc)
            raise StoreError(f"Cannot write {self.path}: {exc}") from exc

    @staticmethod
    def _next_id(documents: list[Document]) -> str:
        """
        Sequential string id that stays unique after deletions:
        one past the largest numeric id (or the count, whichever is larger).
        """
        highest = len(documents)
        for doc in documents:
            try:
                highest = max(highest, int(str(doc.get("id"))))
            except ValueError:
                continue
        return str(highest + 1)

    # ----- Store API -----

    def get_all(self) -> list[Document]:
        with self._lock:
            return self._read()

    def get_by_id(self, doc_id: str) -> Document | None:
        doc_id = str(doc_id)
        return next((d for d in self.get_all() if str(d.get("id")) == doc_id), None)

    def find_one(self, field: str, value: Any) -> Document | None:
        return next((d for d in self.get_all() if d.get(field) == value), None)

    def create(self, data: Document) -> Document:
        with self._lock:
            documents = self._read()
            document = {**data, "id": self._next_id(documents), "created_at": utc_now_iso()}
            documents.append(document)
            self._write(documents)
        logger.debug("Created %s/%s in %s", self.name, document["id"], self.path)
        return document

    def update(self, doc_id: str, data: Document) -> Document | None:
        doc_id = str(doc_id)
        with self._lock:
            documents = self._read()
            for idx, doc in enumerate(documents):
                if str(doc.get("id")) == doc_id:
                    break
            else:
                return None

            updated = {**doc, **data, "id": doc.get("id"), "updated_at": utc_now_iso()}
            documents[idx] = updated
            self._write(documents)
        return updated

    def remove(self, doc_id: str) -> bool:
        doc_id = str(doc_id)
        with self._lock:
            documents = self._read()
            remaining = [d for d in documents if str(d.get("id")) != doc_id]
            if len(remaining) == len(documents):
                return False
            self._write(remaining)
        return True
