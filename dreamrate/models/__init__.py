"""
DreamRate Models
Row shapes for the `dreams` and `reviews` tables.
"""

from dreamrate.models.review import ReviewModel, ReviewWithDream, ReviewCreate, ReviewUpdate
from dreamrate.models.dream import DreamModel, DreamWithReviews

__all__ = [
    "DreamModel",
    "DreamWithReviews",
    "ReviewModel",
    "ReviewWithDream",
    "ReviewCreate",
    "ReviewUpdate",
]
