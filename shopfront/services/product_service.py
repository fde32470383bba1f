# shopfront/services/product_service.py
import logging
from typing import Any

from shopfront.core.errors import InternalError, NotFoundError, ValidationError
from shopfront.core.validation import (
    PRODUCT_FIELDS,
    is_valid_patch_fields,
    is_valid_product_fields,
    is_valid_text_fields,
    require_object,
    to_number_if_present,
)
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.store import Document
from shopfront.schemas.product import ProductRead

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - validate payloads (the only source of 400s for products)
      - coerce price/stock to numbers
      - map "absent" repository results to NotFoundError
      - wrap unexpected repository failures into InternalError
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _not_found(product_id: str) -> NotFoundError:
        return NotFoundError(
            f"No product exists with id: {product_id}",
            error="Product not found",
        )

    @staticmethod
    def _internal(action: str, exc: Exception) -> InternalError:
        logger.error("Product service failed to %s: %s", action, exc, exc_info=exc)
        return InternalError(f"Could not {action}")

    @staticmethod
    def _read(document: Document) -> ProductRead:
        return ProductRead.model_validate(document)

    @staticmethod
    def _check_text_fields(data: dict[str, Any]) -> None:
        if not is_valid_text_fields(data):
            raise ValidationError(
                "Name and description must be text",
                error="Invalid field type",
            )

    @classmethod
    def _full_payload(cls, data: dict[str, Any]) -> Document:
        """Validate a create/replace payload and keep only product fields."""
        if not is_valid_product_fields(data):
            raise ValidationError(
                "All fields (name, description, price, stock) are required",
                error="Missing required fields",
            )
        cls._check_text_fields(data)
        return to_number_if_present({f: data[f] for f in PRODUCT_FIELDS})

    # ----- Queries -----

    def list_products(self) -> list[ProductRead]:
        try:
            return [self._read(doc) for doc in self.repo.get_all()]
        except Exception as exc:
            raise self._internal("list products", exc)

    def get_product(self, product_id: str) -> ProductRead:
        try:
            product = self.repo.get_by_id(product_id)
        except Exception as exc:
            raise self._internal("get the product", exc)
        if not product:
            raise self._not_found(product_id)
        return self._read(product)

    # ----- Mutations -----

    def create_product(self, data: Any) -> ProductRead:
        payload = self._full_payload(require_object(data))
        try:
            created = self.repo.create(payload)
        except Exception as exc:
            raise self._internal("create the product", exc)
        logger.info("Created product %s", created.get("id"))
        return self._read(created)

    def replace_product(self, product_id: str, data: Any) -> ProductRead:
        """PUT semantics: every field is required and overwritten."""
        payload = self._full_payload(require_object(data))
        try:
            updated = self.repo.update(product_id, payload)
        except Exception as exc:
            raise self._internal("update the product", exc)
        if not updated:
            raise self._not_found(product_id)
        return self._read(updated)

    def patch_product(self, product_id: str, data: Any) -> ProductRead:
        """PATCH semantics: only whitelisted fields, at least one."""
        if not is_valid_patch_fields(data):
            raise ValidationError(
                "Provide at least one allowed field to update (name, description, price, stock)",
                error="Invalid update fields",
            )
        self._check_text_fields(data)
        try:
            updated = self.repo.update(product_id, to_number_if_present(data))
        except Exception as exc:
            raise self._internal("update the product", exc)
        if not updated:
            raise self._not_found(product_id)
        return self._read(updated)

    def delete_product(self, product_id: str) -> None:
        try:
            deleted = self.repo.remove(product_id)
        except Exception as exc:
            raise self._internal("delete the product", exc)
        if not deleted:
            raise self._not_found(product_id)
        logger.info("Deleted product %s", product_id)
