# shopfront/schemas/product.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Product representation for clients.

    Stored documents may carry extra keys (legacy local files); they are
    dropped here. Numbers keep their type (10 stays 10, 99.99 stays 99.99).
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    name: str | None = None
    description: str | None = None
    price: int | float | str | None = None
    stock: int | float | str | None = None
    created_at: str | None = None
    updated_at: str | None = None
