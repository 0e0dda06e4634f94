"""Authentication endpoints for sign-up, sign-in and the current user."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from dreamrate.dependencies import get_current_user
from dreamrate.schemas import ApiResponse, SignInRequest, SignUpRequest
from dreamrate.services.auth_service import AuthService, get_auth_service

router = APIRouter()


def _auth_payload(response: Any) -> Dict[str, Optional[Any]]:
    """Flatten an auth response into the fields clients need."""
    user = getattr(response, "user", None)
    session = getattr(response, "session", None)
    return {
        "uid": getattr(user, "id", None),
        "email": getattr(user, "email", None),
        "access_token": getattr(session, "access_token", None),
        "refresh_token": getattr(session, "refresh_token", None),
        "expires_at": getattr(session, "expires_at", None),
    }


@router.post("/signup", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse:
    """
    Create a new account.

    When the project requires email confirmation the response carries no
    session tokens until the address is confirmed.
    """
    response = await auth_service.sign_up(request.email, request.password)
    return ApiResponse.ok(_auth_payload(response), "Signup successful")


@router.post("/login", response_model=ApiResponse)
async def login(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Sign in with email and password."""
    response = await auth_service.sign_in(request.email, request.password)
    return ApiResponse.ok(_auth_payload(response), "Login successful")


@router.get("/me", response_model=ApiResponse)
async def me(current_user: dict = Depends(get_current_user)) -> ApiResponse:
    """Get the user behind the bearer token."""
    return ApiResponse.ok(current_user, "User retrieved successfully")
