# app/main.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import Settings, get_settings
from app.database import ProductStore
from app.errors import register_exception_handlers
from app.routes import router as products_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request line before it is dispatched."""

    async def dispatch(self, request: Request, call_next):
        target = request.url.path
        if request.url.query:
            target += f"?{request.url.query}"
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        logger.info(f"{request.method} {target} @ {now}")
        return await call_next(request)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Build an app with its own product store.

    Passing ``settings`` pins the configuration for this app instance (tests
    use this instead of the environment).
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.store = store if store is not None else ProductStore()
    app.dependency_overrides[get_settings] = lambda: settings

    if not settings.api_key:
        logger.warning("API_KEY is not set; every product request will be rejected")

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "Hello World"

    app.include_router(products_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info(f"Server running at http://localhost:{settings.port}")
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
