"""
Dream Request Schemas
API schemas for dream operations.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class UpdateDreamRequest(BaseModel):
    """Replace a dream's title and text."""

    title: str = Field(min_length=1, max_length=200, description="Dream title")
    content: str = Field(min_length=1, description="Dream text")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class CreateDreamRequest(UpdateDreamRequest):
    """Submit a new dream."""

    tags: Optional[List[str]] = Field(default=None, max_length=20, description="Optional tags")

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Strip tags and drop empty ones."""
        if v is None:
            return v
        return [tag.strip() for tag in v if tag.strip()]
