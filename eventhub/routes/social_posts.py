from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from eventhub.database import get_db
from eventhub.crud import event_crud, social_post_crud
from eventhub.exceptions import EventHubError, NotFoundError, UnexpectedError
from eventhub.models.user import User
from eventhub.query.params import parse_page_request, parse_positive_int, parse_post_search
from eventhub.schemas.social_post import SocialPostResponseSchema, SocialPostPageSchema
from eventhub.auth.dependencies import get_current_user
from eventhub import uploads

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/social-posts",
    tags=["Social Posts"]
)


@router.get(
    "",
    response_model=SocialPostPageSchema,
    summary="Search social posts with sorting and pagination (Public)"
)
async def search_social_posts(
    db: AsyncSession = Depends(get_db),
    q: Optional[str] = None,
    event_id: Optional[str] = Query(default=None, alias="eventId"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None
):
    search = parse_post_search(q=q, event_id=event_id, sort=sort)
    page_request = parse_page_request(page, limit)
    try:
        result = await social_post_crud.search_posts(db, search, page_request)
    except Exception as e:
        logger.error(f"Error fetching social posts for {search}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch social posts")
    return SocialPostPageSchema(
        posts=[SocialPostResponseSchema.from_joined(joined) for joined in result.items],
        total=result.total,
        total_pages=result.total_pages,
        per_page=result.per_page
    )


@router.get(
    "/recent",
    response_model=List[SocialPostResponseSchema],
    summary="Latest three social posts with their authors (Public)"
)
async def get_recent_social_posts(db: AsyncSession = Depends(get_db)):
    try:
        posts = await social_post_crud.get_recent_posts(db)
    except Exception as e:
        logger.error(f"Error fetching recent posts: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch recent posts")
    return [SocialPostResponseSchema.from_joined(joined) for joined in posts]


@router.get(
    "/event/{event_id}",
    response_model=List[SocialPostResponseSchema],
    summary="All social posts for an event, newest first (Public)"
)
async def get_social_posts_by_event(event_id: int, db: AsyncSession = Depends(get_db)):
    try:
        posts = await social_post_crud.get_posts_by_event(db, event_id)
    except Exception as e:
        logger.error(f"Error fetching posts for event ID {event_id}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to fetch event posts")
    return [SocialPostResponseSchema.from_joined(joined) for joined in posts]


@router.post(
    "",
    response_model=SocialPostResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a social post with an optional image (Authenticated user)"
)
async def create_social_post(
    content: Optional[str] = Form(default=None),
    event_id: Optional[str] = Form(default=None, alias="eventId"),
    image: Optional[UploadFile] = File(default=None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # A rollback expires current_user, so read its id up front.
    user_id = current_user.id
    content = social_post_crud.clean_content(content)
    linked_event_id = parse_positive_int(event_id)
    if linked_event_id is not None and await event_crud.get_event_by_id(db, linked_event_id) is None:
        raise NotFoundError(f"Event with id {linked_event_id} not found.")

    image_url = None
    if image is not None and image.filename:
        image_url = await uploads.save_upload(image)

    try:
        joined = await social_post_crud.create_social_post(
            db,
            user_id=user_id,
            content=content,
            event_id=linked_event_id,
            image_url=image_url
        )
    except EventHubError:
        await db.rollback()
        if image_url:
            uploads.discard_upload(image_url)
        raise
    except Exception as e:
        await db.rollback()
        if image_url:
            uploads.discard_upload(image_url)
        logger.error(f"Error creating social post for user ID {user_id}: {str(e)}", exc_info=True)
        raise UnexpectedError("Failed to create social post")
    logger.info(f"Social post ID {joined.post.id} created by user ID {user_id} (event: {linked_event_id})")
    return SocialPostResponseSchema.from_joined(joined)
