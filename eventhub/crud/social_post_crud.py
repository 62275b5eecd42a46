from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import Select, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.exceptions import ValidationError
from eventhub.models import fits_sql_int, utcnow
from eventhub.models.social_post import SocialPost
from eventhub.models.user import User
from eventhub.query.filters import PostSearch, combine, post_clauses, post_ordering
from eventhub.query.pagination import Page, PageRequest, paginate

RECENT_LIMIT = 3


@dataclass(frozen=True)
class PostWithAuthor:
    post: SocialPost
    user: Optional[User]


def _with_author() -> Select:
    # Outer join: a post whose author row is gone still comes back with user=None
    return select(SocialPost, User).outerjoin(User, SocialPost.user_id == User.id)


def _to_joined(row: Row) -> PostWithAuthor:
    return PostWithAuthor(post=row[0], user=row[1])


async def search_posts(db: AsyncSession, search: PostSearch, page: PageRequest) -> Page[PostWithAuthor]:
    stmt = (
        _with_author()
        .where(combine(post_clauses(search), SocialPost))
        .order_by(*post_ordering(search.sort))
    )
    return await paginate(db, stmt, page, transform=_to_joined)


async def get_recent_posts(db: AsyncSession) -> List[PostWithAuthor]:
    result = await db.execute(
        _with_author().order_by(SocialPost.created_at.desc(), SocialPost.id.desc()).limit(RECENT_LIMIT)
    )
    return [_to_joined(row) for row in result.all()]


async def get_posts_by_event(db: AsyncSession, event_id: int) -> List[PostWithAuthor]:
    if not fits_sql_int(event_id):
        return []
    result = await db.execute(
        _with_author()
        .where(SocialPost.event_id == event_id)
        .order_by(SocialPost.created_at.desc(), SocialPost.id.desc())
    )
    return [_to_joined(row) for row in result.all()]


async def get_post_with_author(db: AsyncSession, post_id: int) -> PostWithAuthor | None:
    result = await db.execute(_with_author().where(SocialPost.id == post_id))
    row = result.first()
    return _to_joined(row) if row is not None else None


def clean_content(content: Optional[str]) -> str:
    if content is None or not content.strip():
        raise ValidationError("Content is required")
    return content.strip()


async def create_social_post(
    db: AsyncSession,
    user_id: str,
    content: Optional[str],
    event_id: Optional[int] = None,
    image_url: Optional[str] = None,
) -> PostWithAuthor:
    db_post = SocialPost(
        user_id=user_id,
        content=clean_content(content),
        event_id=event_id,
        image_url=image_url,
        likes=0,
        comments=0,
        created_at=utcnow(),
    )
    db.add(db_post)
    await db.commit()
    await db.refresh(db_post)
    return await get_post_with_author(db, db_post.id)
