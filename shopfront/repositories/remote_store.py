# shopfront/repositories/remote_store.py
import logging
from typing import Any, Callable

from supabase import Client

from shopfront.repositories.store import Document, Store, utc_now_iso

logger = logging.getLogger(__name__)


class RemoteStore(Store):
    """
    Supabase table used as a keyed document collection.

    - The table assigns `id` on insert (e.g. uuid default).
    - Absence is reported as None/False; any client or network error
      propagates to the caller (FallbackStore decides what to do).
    - The client is created lazily through `client_factory`, so a missing
      configuration surfaces as a failure of the first operation.
    """

    def __init__(self, client_factory: Callable[[], Client], table: str):
        self._client_factory = client_factory
        self.table_name = table
        self.name = table

    def _table(self):
        return self._client_factory().table(self.table_name)

    def get_all(self) -> list[Document]:
        response = self._table().select("*").execute()
        return list(response.data or [])

    def get_by_id(self, doc_id: str) -> Document | None:
        return self.find_one("id", doc_id)

    def find_one(self, field: str, value: Any) -> Document | None:
        response = self._table().select("*").eq(field, value).limit(1).execute()
        rows = response.data or []
        return rows[0] if rows else None

    def create(self, data: Document) -> Document:
        document = {**data, "created_at": utc_now_iso()}
        response = self._table().insert(document).execute()
        rows = response.data or []
        if not rows:
            raise RuntimeError(f"Insert into {self.table_name} returned no row")
        return {**document, **rows[0]}

    def update(self, doc_id: str, data: Document) -> Document | None:
        if self.get_by_id(doc_id) is None:
            return None

        changes = {**data, "updated_at": utc_now_iso()}
        changes.pop("id", None)
        self._table().update(changes).eq("id", doc_id).execute()
        return self.get_by_id(doc_id)

    def remove(self, doc_id: str) -> bool:
        if self.get_by_id(doc_id) is None:
            return False

        self._table().delete().eq("id", doc_id).execute()
        logger.debug("Deleted %s/%s", self.table_name, doc_id)
        return True
