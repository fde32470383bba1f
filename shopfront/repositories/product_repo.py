# shopfront/repositories/product_repo.py
from shopfront.repositories.store import Document, Store


class ProductRepository:
    """
    Data access layer for products.

    - Pure store operations (CRUD).
    - No FastAPI, no business logic.
    - Which backend serves a call (remote, local, fallback) is decided by
      the Store injected at construction.
    """

    def __init__(self, store: Store):
        self.store = store

    def get_all(self) -> list[Document]:
        return self.store.get_all()

    def get_by_id(self, product_id: str) -> Document | None:
        return self.store.get_by_id(product_id)

    def create(self, product: Document) -> Document:
        return self.store.create(product)

    def update(self, product_id: str, changes: Document) -> Document | None:
        return self.store.update(product_id, changes)

    def remove(self, product_id: str) -> bool:
        return self.store.remove(product_id)
