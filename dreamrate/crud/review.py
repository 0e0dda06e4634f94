"""
Review CRUD Operations
Database operations for reviews.
"""

from typing import List

from dreamrate.crud.base import BaseCRUD
from dreamrate.models import ReviewCreate, ReviewModel, ReviewUpdate, ReviewWithDream


class ReviewCRUD(BaseCRUD):
    """CRUD operations for the reviews table."""

    @property
    def table_name(self) -> str:
        """Get table name."""
        return "reviews"

    async def get_reviews_for_dream(self, dream_id: int) -> List[ReviewModel]:
        """
        Get reviews for a specific dream, newest first.
        """
        rows = await self.list_by("dream_id", dream_id)
        return [ReviewModel.model_validate(row) for row in rows]

    async def get_user_reviews(self, user_id: str) -> List[ReviewWithDream]:
        """
        Get a user's reviews, newest first, each with the dream it reviews.
        """
        rows = await self.list_by("created_by", user_id, columns="*,dreams(*)")
        return [ReviewWithDream.model_validate(row) for row in rows]

    async def create_review(self, fields: ReviewCreate) -> ReviewModel:
        """
        Create a new review.

        Args:
            fields: Review body, dream and ratings

        Returns:
            The stored review
        """
        return ReviewModel.model_validate(await self.insert(fields.to_row()))

    async def update_review(self, review_id: int, fields: ReviewUpdate) -> ReviewModel:
        """
        Replace a review's body and ratings.

        Raises:
            NotFoundError: If no review was updated
        """
        row = await self.update(review_id, fields.to_row())
        return ReviewModel.model_validate(row)

    async def delete_review(self, review_id: int) -> None:
        """Delete a review by ID."""
        await self.delete(review_id)
