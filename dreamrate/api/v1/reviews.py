"""Review endpoints."""

from fastapi import APIRouter, Depends, status

from dreamrate.crud import ReviewCRUD
from dreamrate.dependencies import get_current_user, get_review_crud
from dreamrate.schemas import ApiResponse, CreateReviewRequest, UpdateReviewRequest

router = APIRouter()


@router.get("/mine", response_model=ApiResponse)
async def list_my_reviews(
    current_user: dict = Depends(get_current_user),
    reviews: ReviewCRUD = Depends(get_review_crud),
) -> ApiResponse:
    """List the caller's reviews with the dreams they review."""
    items = await reviews.get_user_reviews(current_user["uid"])
    return ApiResponse.ok(items, "Reviews retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: CreateReviewRequest,
    current_user: dict = Depends(get_current_user),
    reviews: ReviewCRUD = Depends(get_review_crud),
) -> ApiResponse:
    """Review a dream."""
    review = await reviews.create_review(request.for_user(current_user["uid"]))
    return ApiResponse.ok(review, "Review created")


@router.put("/{review_id}", response_model=ApiResponse)
async def update_review(
    review_id: int,
    request: UpdateReviewRequest,
    current_user: dict = Depends(get_current_user),
    reviews: ReviewCRUD = Depends(get_review_crud),
) -> ApiResponse:
    """Replace a review's body and ratings."""
    review = await reviews.update_review(review_id, request)
    return ApiResponse.ok(review, "Review updated")


@router.delete("/{review_id}", response_model=ApiResponse)
async def delete_review(
    review_id: int,
    current_user: dict = Depends(get_current_user),
    reviews: ReviewCRUD = Depends(get_review_crud),
) -> ApiResponse:
    """Delete a review."""
    await reviews.delete_review(review_id)
    return ApiResponse.ok(None, "Review deleted")
