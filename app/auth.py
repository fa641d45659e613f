# app/auth.py
import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, Request

from app.config import Settings, get_settings
from app.errors import UnauthorizedError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


def authenticate(supplied: Optional[str], secret: Optional[str]) -> bool:
    """Exact match against the configured secret; no secret means deny."""
    if not secret or supplied is None:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8"))


async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(None, alias=API_KEY_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """FastAPI dependency guarding every product route."""
    if not authenticate(x_api_key, settings.api_key):
        logger.warning(f"Rejected {request.method} {request.url.path}: bad or missing API key")
        raise UnauthorizedError()
