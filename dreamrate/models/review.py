"""
Review Models
Rating-plus-commentary rows in the `reviews` table.
"""

from datetime import datetime
from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from dreamrate.models.dream import DreamModel


class ReviewModel(BaseModel):
    """A stored review of one dream."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="Store-assigned review ID")
    created_at: datetime = Field(description="Creation timestamp")
    created_by: str = Field(description="Reviewer user ID")
    dream_id: int = Field(description="Reviewed dream ID")
    review: str = Field(default="", description="Review body")
    overall_rating: float = Field(description="Overall rating")
    ethics_rating: Optional[float] = Field(default=None, description="Ethics sub-rating")
    creativity_rating: Optional[float] = Field(default=None, description="Creativity sub-rating")
    writing_rating: Optional[float] = Field(default=None, description="Writing sub-rating")


class ReviewWithDream(ReviewModel):
    """A review with its parent dream embedded."""

    # The store embeds the parent under the table name.
    dream: Optional["DreamModel"] = Field(
        default=None,
        validation_alias=AliasChoices("dreams", "dream"),
        description="Parent dream",
    )


class ReviewUpdate(BaseModel):
    """Full replacement of a review's body and ratings."""

    review: str = Field(description="Review body")
    overall_rating: float = Field(ge=0, description="Overall rating")
    ethics_rating: Optional[float] = Field(default=None, ge=0)
    creativity_rating: Optional[float] = Field(default=None, ge=0)
    writing_rating: Optional[float] = Field(default=None, ge=0)

    def to_row(self) -> Dict[str, Any]:
        """Row payload; omitted sub-ratings are written as null."""
        return self.model_dump()


class ReviewCreate(ReviewUpdate):
    """Payload for a new review."""

    dream_id: int = Field(description="Dream being reviewed")
    created_by: Optional[str] = Field(
        default=None,
        description="Reviewer ID; the store defaults it to the session user when omitted",
    )

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump()
        if row["created_by"] is None:
            del row["created_by"]
        return row
