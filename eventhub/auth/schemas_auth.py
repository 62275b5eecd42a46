from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class IdentityClaims(BaseModel):
    """Claims carried by an identity-provider token."""

    sub: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
