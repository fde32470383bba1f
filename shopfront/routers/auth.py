# shopfront/routers/auth.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from shopfront.core.responses import send_created, send_success
from shopfront.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


@router.post("/register", status_code=201)
def register(
    payload: Any = Body(None),
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Register a new user.

    Body: {email, password, name}
    Returns the access token and public user fields.
    """
    result = service.register_user(payload)
    return send_created(result, "User registered successfully")


@router.post("/login")
def login(
    payload: Any = Body(None),
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Log in with email + password.

    Returns a fresh access token (24h) and public user fields.
    """
    result = service.login_user(payload)
    return send_success(result, "Login successful")
