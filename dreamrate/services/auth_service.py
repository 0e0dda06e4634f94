"""Supabase authentication service with observable session state."""

import asyncio
from typing import Any, Optional

from supabase import AuthError

from dreamrate.services.observable import Writable
from dreamrate.utils.exceptions import AuthenticationError
from dreamrate.utils.logger import get_logger

logger = get_logger(__name__)


def _auth_error(action: str, exc: AuthError) -> AuthenticationError:
    message = getattr(exc, "message", None) or str(exc)
    return AuthenticationError(
        message=f"{action} failed: {message}",
        details={
            "code": getattr(exc, "code", None),
            "status": getattr(exc, "status", None),
        },
    )


class AuthService:
    """Wraps the store's auth client and tracks the current session.

    Three observables describe auth state for UI code:

    - ``user``: the signed-in user, or None
    - ``session``: the current session, or None
    - ``loading``: True until the first session lookup or auth event lands

    Call :meth:`start` once the event loop is running. It subscribes to auth
    change notifications and fetches the stored session exactly once.
    """

    def __init__(self, client: Any):
        """Initialize the service.

        Args:
            client: Supabase AsyncClient whose ``auth`` attribute is used
        """
        self._client = client
        self.user: Writable[Optional[Any]] = Writable(None)
        self.session: Writable[Optional[Any]] = Writable(None)
        self.loading: Writable[bool] = Writable(True)

        self._initial_fetch: Optional[asyncio.Task] = None
        self._subscription = None

    @property
    def started(self) -> bool:
        return self._initial_fetch is not None

    def start(self) -> asyncio.Task:
        """Subscribe to auth changes and schedule the initial session fetch.

        Returns:
            The initial-fetch task. Later calls return the same task.
        """
        if self._initial_fetch is None:
            self._subscription = self._client.auth.on_auth_state_change(self._on_auth_state_change)
            self._initial_fetch = asyncio.ensure_future(self._load_initial_session())
            logger.debug("Auth state tracking started")
        return self._initial_fetch

    def stop(self) -> None:
        """Drop the auth-change subscription and cancel a pending initial fetch."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._initial_fetch is not None and not self._initial_fetch.done():
            self._initial_fetch.cancel()
        logger.debug("Auth state tracking stopped")

    async def _load_initial_session(self) -> None:
        try:
            session = await self._client.auth.get_session()
        except Exception:
            # Leave the UI in a signed-out, settled state; the awaiter sees the error.
            self._apply_session(None)
            logger.error("Initial session lookup failed", exc_info=True)
            raise
        self._apply_session(session)

    def _on_auth_state_change(self, event: Any, session: Optional[Any]) -> None:
        logger.info(f"Auth state changed: {getattr(event, 'value', event)}")
        self._apply_session(session)

    def _apply_session(self, session: Optional[Any]) -> None:
        # All three slots change before any subscriber runs, and every slot
        # notifies even if an earlier subscriber raised.
        self.session.assign(session)
        self.user.assign(getattr(session, "user", None) if session else None)
        self.loading.assign(False)

        failure: Optional[Exception] = None
        for store in (self.session, self.user, self.loading):
            try:
                store.notify()
            except Exception as e:
                logger.error("Auth state subscriber failed", exc_info=True)
                failure = failure or e
        if failure is not None:
            raise failure

    async def sign_up(self, email: str, password: str) -> Any:
        """Create an account.

        Returns:
            The store's auth response (user and, when confirmation is off, session)

        Raises:
            AuthenticationError: If the store rejects the sign-up
        """
        try:
            response = await self._client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            logger.warning(f"Sign-up failed for {email}: {e}")
            raise _auth_error("Sign-up", e) from e
        logger.info(f"Signed up {email}")
        return response

    async def sign_in(self, email: str, password: str) -> Any:
        """Sign in with email and password.

        Raises:
            AuthenticationError: On bad credentials or auth service failure
        """
        try:
            response = await self._client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            raise _auth_error("Sign-in", e) from e
        logger.info(f"Signed in {email}")
        return response

    async def sign_out(self) -> None:
        try:
            await self._client.auth.sign_out()
        except AuthError as e:
            raise _auth_error("Sign-out", e) from e
        logger.info("Signed out")

    def get_current_user(self) -> asyncio.Task:
        """Start a current-user lookup; the caller awaits the returned task."""
        return asyncio.ensure_future(self._client.auth.get_user())

    async def verify_token(self, token: str) -> Any:
        """Resolve a bearer token to its user.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        try:
            response = await self._client.auth.get_user(token)
        except AuthError as e:
            raise _auth_error("Token verification", e) from e
        user = getattr(response, "user", None) if response else None
        if user is None:
            raise AuthenticationError(message="Invalid or expired token")
        return user


_auth_service: Optional[AuthService] = None
_auth_service_lock = asyncio.Lock()


async def get_auth_service() -> AuthService:
    """Get or create the process-wide AuthService, bound to the shared client."""
    global _auth_service
    if _auth_service is not None:
        return _auth_service

    async with _auth_service_lock:
        if _auth_service is None:
            from dreamrate.dependencies import get_db_client

            _auth_service = AuthService(await get_db_client())
    return _auth_service


def reset_auth_service() -> None:
    """Forget the shared service so the next call rebuilds it."""
    global _auth_service, _auth_service_lock
    _auth_service = None
    _auth_service_lock = asyncio.Lock()
