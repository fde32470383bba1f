# shopfront/services/auth_service.py
import logging
import threading
from datetime import timedelta
from typing import Any

from shopfront.core.config import Settings
from shopfront.core.errors import (
    AuthError,
    ConflictError,
    InternalError,
    ValidationError,
)
from shopfront.core.security import hash_password, sign_token, verify_password
from shopfront.core.validation import is_valid_email, is_valid_password, require_object
from shopfront.repositories.store import Document
from shopfront.repositories.user_repo import UserRepository
from shopfront.schemas.user import AuthResult, UserRead

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - validate credentials payloads
      - enforce unique email (lookup and insert under one lock)
      - hash passwords, issue signed access tokens {id, email}
      - map domain errors to AppError subclasses
    """

    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings
        # Serializes the email lookup and the insert across request threads
        self._register_lock = threading.Lock()

    # ----- Helpers -----

    def _issue_token(self, user: Document) -> str:
        return sign_token(
            {"id": str(user["id"]), "email": user["email"]},
            self.settings.jwt_secret,
            algorithm=self.settings.JWT_ALG,
            expires_in=timedelta(hours=self.settings.ACCESS_TOKEN_EXPIRE_HOURS),
        )

    @staticmethod
    def _invalid_credentials() -> AuthError:
        return AuthError("Email or password is incorrect", error="Invalid credentials")

    @staticmethod
    def _check_email(email: Any) -> None:
        if not is_valid_email(email):
            raise ValidationError("Email format is not valid", error="Invalid email")

    # ----- Public operations -----

    def register_user(self, data: Any) -> AuthResult:
        """
        Create a user and return a token for it.

        Raises:
            ValidationError(400): missing fields, bad email, short password
            ConflictError(400): email already registered
            InternalError(500): store failure
        """
        data = require_object(data)
        email = data.get("email")
        password = data.get("password")
        name = data.get("name")

        if not email or not password or not name:
            raise ValidationError(
                "Email, password and name are required",
                error="Missing required fields",
            )
        self._check_email(email)
        if not is_valid_password(password):
            raise ValidationError(
                "Password must be at least 6 characters long",
                error="Invalid password",
            )

        password_hash = hash_password(password)
        try:
            with self._register_lock:
                if self.repo.get_by_email(email):
                    raise ConflictError(
                        "A user with this email is already registered",
                        error="User already exists",
                    )
                user = self.repo.create(
                    {"email": email, "password_hash": password_hash, "name": name}
                )
        except ConflictError:
            raise
        except Exception as exc:
            logger.error("Failed to register user: %s", exc, exc_info=exc)
            raise InternalError("Could not register the user")

        logger.info("Registered user %s", user.get("id"))
        return AuthResult(token=self._issue_token(user), user=UserRead.model_validate(user))

    def login_user(self, data: Any) -> AuthResult:
        """
        Verify credentials and return a fresh token.

        Raises:
            ValidationError(400): missing fields or bad email
            AuthError(401): unknown email or wrong password
            InternalError(500): store failure
        """
        data = require_object(data)
        email = data.get("email")
        password = data.get("password")

        if not email or not password:
            raise ValidationError(
                "Email and password are required",
                error="Missing required fields",
            )
        self._check_email(email)

        try:
            user = self.repo.get_by_email(email)
        except Exception as exc:
            logger.error("Failed to look up user for login: %s", exc, exc_info=exc)
            raise InternalError("Could not process the login")

        if not user or not isinstance(password, str):
            raise self._invalid_credentials()
        if not verify_password(password, user.get("password_hash")):
            raise self._invalid_credentials()

        return AuthResult(token=self._issue_token(user), user=UserRead.model_validate(user))
