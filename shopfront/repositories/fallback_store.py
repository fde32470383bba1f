# shopfront/repositories/fallback_store.py
"""
Primary-first store with a degraded secondary.

Every operation is attempted on the primary (remote) store. If it raises,
the failure is logged and the same operation is re-run on the secondary
(local JSON file) whose result is returned. The two stores are not kept in
sync: a write served by the secondary only exists there.

Callers get the same return values either way. To keep degraded responses
visible, each fallback is recorded on the current request's
FallbackTracker (see `track_fallbacks`), which the app turns into an
`X-Data-Source` response header.
"""

import logging
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from shopfront.repositories.store import Document, Store

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FallbackTracker:
    """Collects the operations served by a secondary store during a request."""

    operations: list[str] = field(default_factory=list)

    @property
    def used(self) -> bool:
        return bool(self.operations)


_tracker: ContextVar[FallbackTracker | None] = ContextVar("fallback_tracker", default=None)


def track_fallbacks() -> FallbackTracker:
    """Start tracking fallbacks for the current context (one per request)."""
    tracker = FallbackTracker()
    _tracker.set(tracker)
    return tracker


class FallbackStore(Store):
    def __init__(self, primary: Store, secondary: Store):
        self.primary = primary
        self.secondary = secondary
        self.name = primary.name or secondary.name

    def _run(self, operation: str, call: Callable[[Store], T]) -> T:
        try:
            return call(self.primary)
        except Exception as exc:
            logger.warning(
                "Remote store unavailable for %s (%s): %s; using local fallback",
                operation,
                self.name,
                exc,
            )
            tracker = _tracker.get()
            if tracker is not None:
                tracker.operations.append(f"{self.name}.{operation}")
        return call(self.secondary)

    def get_all(self) -> list[Document]:
        return self._run("get_all", lambda s: s.get_all())

    def get_by_id(self, doc_id: str) -> Document | None:
        return self._run("get_by_id", lambda s: s.get_by_id(doc_id))

    def find_one(self, field: str, value: Any) -> Document | None:
        return self._run("find_one", lambda s: s.find_one(field, value))

    def create(self, data: Document) -> Document:
        return self._run("create", lambda s: s.create(data))

    def update(self, doc_id: str, data: Document) -> Document | None:
        return self._run("update", lambda s: s.update(doc_id, data))

    def remove(self, doc_id: str) -> bool:
        return self._run("remove", lambda s: s.remove(doc_id))
