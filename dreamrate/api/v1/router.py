"""Main v1 API router that aggregates all sub-routers."""

from fastapi import APIRouter

from dreamrate.schemas import ErrorResponse

from .auth import router as auth_router
from .dreams import router as dreams_router
from .reviews import router as reviews_router

_error_responses = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}

# Main v1 router
router = APIRouter(prefix="/api/v1", responses=_error_responses)

router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(dreams_router, prefix="/dreams", tags=["Dreams"])
router.include_router(reviews_router, prefix="/reviews", tags=["Reviews"])

__all__ = ["router"]
