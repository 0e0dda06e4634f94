"""
Dream Models
User-submitted stories in the `dreams` table.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from dreamrate.models.review import ReviewModel, ReviewWithDream


class DreamModel(BaseModel):
    """A stored dream."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="Store-assigned dream ID")
    created_at: datetime = Field(description="Creation timestamp")
    created_by: str = Field(description="Owner user ID")
    title: str = Field(default="", description="Dream title")
    # Rows written before the title/content split carry `story` instead.
    content: str = Field(
        validation_alias=AliasChoices("content", "story"),
        description="Dream text",
    )
    tags: Optional[List[str]] = Field(default=None, description="Free-form tags")


class DreamWithReviews(DreamModel):
    """A dream with all of its reviews embedded."""

    reviews: List[ReviewModel] = Field(default_factory=list, description="Reviews of this dream")


ReviewWithDream.model_rebuild()
