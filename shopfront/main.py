# shopfront/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from shopfront.core.config import Settings, get_settings
from shopfront.core.errors import AppError, InternalError, ValidationError
from shopfront.core.responses import send_error
from shopfront.database import Stores, build_stores
from shopfront.repositories.fallback_store import track_fallbacks
from shopfront.repositories.product_repo import ProductRepository
from shopfront.repositories.store import Store
from shopfront.repositories.user_repo import UserRepository
from shopfront.services.auth_service import AuthService
from shopfront.services.product_service import ProductService

# Routers
from shopfront.routers.auth import router as auth_router
from shopfront.routers.products import router as products_router

logger = logging.getLogger("uvicorn")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Report the data source and warn about the development JWT key.

    Shutdown:
      - Nothing to release; stores open files per operation.
    """
    settings: Settings = app.state.settings
    logger.info(
        "🔄 Startup: data source=%s, local data dir=%s",
        settings.DATA_SOURCE,
        settings.DATA_DIR,
    )
    if settings.uses_dev_secret:
        logger.warning(
            "⚠️ JWT_SECRET is not set; signing tokens with the development key. "
            "Do not run like this outside development."
        )
    yield
    logger.info("🛑 Shutdown: HTTP server closed")


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return send_error(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return send_error(ValidationError("Request body must be valid JSON"))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return send_error(InternalError("Unexpected server error"))


def create_app(
    settings: Settings | None = None,
    *,
    product_store: Store | None = None,
    user_store: Store | None = None,
) -> FastAPI:
    """
    Build the API.

    Stores default to the ones selected by settings.DATA_SOURCE; tests
    pass their own to exercise fallback behaviour.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    if product_store is None or user_store is None:
        stores = build_stores(settings)
        product_store = product_store or stores.products
        user_store = user_store or stores.users
    stores = Stores(products=product_store, users=user_store)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.product_service = ProductService(ProductRepository(stores.products))
    app.state.auth_service = AuthService(UserRepository(stores.users), settings)

    _register_exception_handlers(app)

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    @app.middleware("http")
    async def response_headers(request: Request, call_next):
        """
        Add security headers, and flag responses that were served (even
        partly) from the local fallback store.
        """
        tracker = track_fallbacks()
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if tracker.used:
            response.headers["X-Data-Source"] = "local-fallback"
        return response

    # API prefix, e.g. /api
    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(products_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """API index."""
        return {
            "message": "API running",
            "endpoints": [
                f"{settings.API_PREFIX}/auth",
                f"{settings.API_PREFIX}/products",
            ],
        }

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "shopfront", "data_source": settings.DATA_SOURCE}

    return app


app = create_app()
