from datetime import datetime
from typing import Optional, List, TYPE_CHECKING

from eventhub.schemas.base import APISchema
from eventhub.schemas.user import UserResponseSchema

if TYPE_CHECKING:
    from eventhub.crud.social_post_crud import PostWithAuthor


class SocialPostSchema(APISchema):
    id: int
    user_id: str
    content: str
    image_url: Optional[str] = None
    event_id: Optional[int] = None
    likes: int
    comments: int
    created_at: Optional[datetime] = None


class SocialPostResponseSchema(SocialPostSchema):
    user: Optional[UserResponseSchema] = None

    @classmethod
    def from_joined(cls, joined: "PostWithAuthor") -> "SocialPostResponseSchema":
        post = SocialPostSchema.model_validate(joined.post)
        author = UserResponseSchema.model_validate(joined.user) if joined.user is not None else None
        return cls(**post.model_dump(), user=author)


class SocialPostPageSchema(APISchema):
    posts: List[SocialPostResponseSchema]
    total: int
    total_pages: int
    per_page: int
