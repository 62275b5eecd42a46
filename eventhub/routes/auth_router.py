from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
import logging

from eventhub.database import get_db
from eventhub.auth import user_crud
from eventhub.auth.dependencies import get_current_user, get_identity_claims
from eventhub.auth.schemas_auth import IdentityClaims
from eventhub.exceptions import ConflictError, UnexpectedError
from eventhub.models.user import User
from eventhub.schemas.user import UserResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=UserResponseSchema)
async def login(
    claims: IdentityClaims = Depends(get_identity_claims),
    db: AsyncSession = Depends(get_db)
):
    """Create or refresh the local user record for an identity-provider token."""
    try:
        user = await user_crud.upsert_user(db, claims)
    except IntegrityError as e_integrity:
        await db.rollback()
        logger.warning(f"IntegrityError upserting user {claims.sub}: {str(e_integrity)}")
        raise ConflictError("Email already belongs to another user.")
    except Exception as e_general:
        await db.rollback()
        logger.error(f"Unexpected error upserting user {claims.sub}: {str(e_general)}", exc_info=True)
        raise UnexpectedError("Failed to log in")
    logger.info(f"User logged in: {user.id}")
    return user


@router.get("/user", response_model=UserResponseSchema)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
