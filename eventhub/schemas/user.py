from typing import Optional
from datetime import datetime
from eventhub.schemas.base import APISchema


class UserResponseSchema(APISchema):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
