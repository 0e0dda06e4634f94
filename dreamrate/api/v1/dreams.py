"""Dream endpoints: own dreams, random discovery, and dream CRUD."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from dreamrate.config import get_settings
from dreamrate.crud import DreamCRUD, ReviewCRUD
from dreamrate.dependencies import get_current_user, get_dream_crud, get_review_crud
from dreamrate.schemas import ApiResponse, CreateDreamRequest, UpdateDreamRequest
from dreamrate.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()

settings = get_settings()
_count_query = Query(
    None,
    ge=1,
    le=settings.random_feed_max_count,
    description="Number of dreams (defaults to RANDOM_FEED_DEFAULT_COUNT)",
)


@router.get("/mine", response_model=ApiResponse)
async def list_my_dreams(
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """List the caller's dreams, newest first."""
    items = await dreams.get_user_dreams(current_user["uid"])
    return ApiResponse.ok(items, "Dreams retrieved successfully")


@router.get("/random", response_model=ApiResponse)
async def random_dreams(
    count: Optional[int] = _count_query,
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """Random dreams by other users, for rating."""
    items = await dreams.get_random_dreams(current_user["uid"], count or settings.random_feed_default_count)
    return ApiResponse.ok(items, "Dreams retrieved successfully")


@router.get("/feed", response_model=ApiResponse)
async def dream_feed(
    count: Optional[int] = _count_query,
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """Random dreams by other users, each with its reviews."""
    items = await dreams.get_dreams_with_reviews(current_user["uid"], count or settings.random_feed_default_count)
    return ApiResponse.ok(items, "Feed retrieved successfully")


@router.get("/{dream_id}", response_model=ApiResponse)
async def get_dream(
    dream_id: int,
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """Get one dream with its reviews."""
    dream = await dreams.get_dream_with_reviews(dream_id)
    return ApiResponse.ok(dream, "Dream retrieved successfully")


@router.get("/{dream_id}/reviews", response_model=ApiResponse)
async def get_dream_reviews(
    dream_id: int,
    current_user: dict = Depends(get_current_user),
    reviews: ReviewCRUD = Depends(get_review_crud),
) -> ApiResponse:
    """List a dream's reviews, newest first."""
    items = await reviews.get_reviews_for_dream(dream_id)
    return ApiResponse.ok(items, "Reviews retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_dream(
    request: CreateDreamRequest,
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """Submit a new dream owned by the caller."""
    dream = await dreams.create_dream(
        title=request.title,
        content=request.content,
        owner_id=current_user["uid"],
        tags=request.tags,
    )
    return ApiResponse.ok(dream, "Dream created")


@router.put("/{dream_id}", response_model=ApiResponse)
async def update_dream(
    dream_id: int,
    request: UpdateDreamRequest,
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """Replace a dream's title and text."""
    dream = await dreams.update_dream(dream_id, request.title, request.content)
    return ApiResponse.ok(dream, "Dream updated")


@router.delete("/{dream_id}", response_model=ApiResponse)
async def delete_dream(
    dream_id: int,
    current_user: dict = Depends(get_current_user),
    dreams: DreamCRUD = Depends(get_dream_crud),
) -> ApiResponse:
    """Delete a dream."""
    await dreams.delete_dream(dream_id)
    logger.info(f"User {current_user['uid']} deleted dream {dream_id}")
    return ApiResponse.ok(None, "Dream deleted")
