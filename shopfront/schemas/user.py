# shopfront/schemas/user.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class UserRead(SQLModel):
    """Public user fields. The password hash is never included."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    email: str
    name: str | None = None


class AuthResult(SQLModel):
    """Returned by register and login."""

    token: str
    user: UserRead
