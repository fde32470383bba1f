# shopfront/repositories/store.py
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

Document = dict[str, Any]


def utc_now_iso() -> str:
    """Timestamp format used for created_at / updated_at."""
    return datetime.now(timezone.utc).isoformat()


class Store(ABC):
    """
    Keyed collection of JSON-like documents.

    Contract shared by every implementation:
      - get_by_id / find_one return None when nothing matches
      - create assigns `id` and `created_at`
      - update returns None when the id is absent, otherwise merges the
        given fields over the stored ones and sets `updated_at`
      - remove returns True only if a document was deleted
      - backend failures raise (they are never reported as "absent")
    """

    #: Label used in log messages, e.g. "products"
    name: str = ""

    @abstractmethod
    def get_all(self) -> list[Document]: ...

    @abstractmethod
    def get_by_id(self, doc_id: str) -> Document | None: ...

    @abstractmethod
    def find_one(self, field: str, value: Any) -> Document | None: ...

    @abstractmethod
    def create(self, data: Document) -> Document: ...

    @abstractmethod
    def update(self, doc_id: str, data: Document) -> Document | None: ...

    @abstractmethod
    def remove(self, doc_id: str) -> bool: ...
