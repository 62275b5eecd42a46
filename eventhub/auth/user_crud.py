from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.auth.schemas_auth import IdentityClaims
from eventhub.models import utcnow
from eventhub.models.user import User


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    return await db.get(User, user_id)


async def upsert_user(db: AsyncSession, claims: IdentityClaims) -> User:
    """Create or refresh the user behind a token; ``is_admin`` is never touched."""
    profile = {
        "email": str(claims.email) if claims.email else None,
        "first_name": claims.first_name,
        "last_name": claims.last_name,
        "profile_image_url": claims.profile_image_url,
    }
    db_user = await db.get(User, claims.sub)
    if db_user is None:
        db_user = User(id=claims.sub, is_admin=False, **profile)
        db.add(db_user)
    else:
        for key, value in profile.items():
            setattr(db_user, key, value)
        db_user.updated_at = utcnow()

    await db.commit()
    await db.refresh(db_user)
    return db_user
