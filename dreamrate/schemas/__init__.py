"""
DreamRate Schemas
Pydantic request/response schemas for API validation and documentation.
"""

from dreamrate.schemas.dream_schema import CreateDreamRequest, UpdateDreamRequest
from dreamrate.schemas.review_schema import CreateReviewRequest, UpdateReviewRequest
from dreamrate.schemas.user_schema import SignInRequest, SignUpRequest
from dreamrate.schemas.responses import ApiResponse, ErrorResponse

__all__ = [
    "CreateDreamRequest",
    "UpdateDreamRequest",
    "CreateReviewRequest",
    "UpdateReviewRequest",
    "SignInRequest",
    "SignUpRequest",
    "ApiResponse",
    "ErrorResponse",
]
