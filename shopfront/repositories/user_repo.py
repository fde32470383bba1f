# shopfront/repositories/user_repo.py
from shopfront.repositories.store import Document, Store


class UserRepository:
    """
    Data access layer for users.

    Responsibilities:
      - Pure store operations (CRUD + lookup by email)
      - No FastAPI, no HTTP, no business logic
    """

    def __init__(self, store: Store):
        self.store = store

    # ----- Basic CRUD -----

    def get_all(self) -> list[Document]:
        """Return every stored user document."""
        return self.store.get_all()

    def get_by_id(self, user_id: str) -> Document | None:
        """Return a user by id, or None if not found."""
        return self.store.get_by_id(user_id)

    def get_by_email(self, email: str) -> Document | None:
        """Return a user by unique email, or None if not found."""
        return self.store.find_one("email", email)

    def create(self, user: Document) -> Document:
        """Insert a new user and return the stored document (with id)."""
        return self.store.create(user)

    def update(self, user_id: str, changes: Document) -> Document | None:
        """Merge changes into an existing user; None if the id is unknown."""
        return self.store.update(user_id, changes)

    def remove(self, user_id: str) -> bool:
        """Delete a user; False if the id is unknown."""
        return self.store.remove(user_id)
