# shopfront/server.py
import uvicorn

from shopfront.core.config import get_settings


def main() -> None:
    """
    Run the API with uvicorn on HOST:PORT from settings.

    uvicorn installs the SIGINT/SIGTERM handlers and drains open
    connections before the lifespan shutdown runs.
    """
    settings = get_settings()
    uvicorn.run(
        "shopfront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    main()
