"""
Review Request Schemas
API schemas for review operations.
"""

from pydantic import Field

from dreamrate.models import ReviewCreate, ReviewUpdate


class UpdateReviewRequest(ReviewUpdate):
    """Replace a review's body and ratings."""


class CreateReviewRequest(ReviewUpdate):
    """Review a dream. The reviewer is the authenticated caller."""

    dream_id: int = Field(description="Dream being reviewed")

    def for_user(self, user_id: str) -> ReviewCreate:
        return ReviewCreate(**self.model_dump(), created_by=user_id)
