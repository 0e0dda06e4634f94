"""
Shared application dependencies.
Holds the process-wide store handle and per-request FastAPI dependencies.
"""

import asyncio
from typing import AsyncIterator, Dict, Optional

from fastapi import Depends, Header
from postgrest import AsyncPostgrestClient
from supabase import AsyncClient, acreate_client

from dreamrate.config import Settings, get_settings
from dreamrate.crud import DreamCRUD, ReviewCRUD
from dreamrate.services.auth_service import AuthService, get_auth_service
from dreamrate.utils.exceptions import AuthenticationError
from dreamrate.utils.logger import get_logger

logger = get_logger(__name__)

# Global Instances
_db_client: Optional[AsyncClient] = None
_db_client_lock = asyncio.Lock()


async def get_db_client() -> AsyncClient:
    """
    Get the process-wide Supabase client, creating it on first use.

    Raises:
        ConfigurationError: If the store URL or anon key is missing
    """
    global _db_client
    if _db_client is not None:
        return _db_client

    async with _db_client_lock:
        if _db_client is None:
            settings = get_settings()
            settings.require_store_config()
            _db_client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
            logger.info(f"Supabase client initialized for {settings.supabase_url}")
    return _db_client


def reset_db_client() -> None:
    """Forget the shared client so the next call rebuilds it."""
    global _db_client, _db_client_lock
    _db_client = None
    _db_client_lock = asyncio.Lock()


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Extract the bearer token from the Authorization header."""
    if not authorization:
        raise AuthenticationError(message="Authorization header missing")
    if not authorization.startswith("Bearer "):
        raise AuthenticationError(message="Invalid authorization header format")
    return authorization[len("Bearer "):]


async def get_current_user(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    """Get current user from the bearer token, verified by the store's auth service."""
    user = await auth_service.verify_token(token)
    return {"uid": user.id, "email": getattr(user, "email", None) or ""}


async def get_user_db(
    token: str = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[AsyncPostgrestClient]:
    """
    PostgREST client acting as the caller, so row-level policies see them.
    Closed when the request finishes.
    """
    settings.require_store_config()
    client = AsyncPostgrestClient(
        settings.rest_url,
        headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
            "apikey": settings.supabase_anon_key,
            "Authorization": f"Bearer {token}",
        },
    )
    try:
        yield client
    finally:
        await client.aclose()


def get_dream_crud(db=Depends(get_user_db)) -> DreamCRUD:
    return DreamCRUD(db)


def get_review_crud(db=Depends(get_user_db)) -> ReviewCRUD:
    return ReviewCRUD(db)
