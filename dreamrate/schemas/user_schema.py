"""
User Request Schemas
API schemas for sign-up and sign-in.
"""

from pydantic import BaseModel, Field, field_validator


class SignInRequest(BaseModel):
    """Email and password credentials."""

    email: str = Field(max_length=320, description="Account email")
    password: str = Field(min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic shape check; the auth service does real validation."""
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Invalid email address")
        return v


class SignUpRequest(SignInRequest):
    """New account credentials."""

    password: str = Field(min_length=6, description="Password (minimum 6 characters)")
