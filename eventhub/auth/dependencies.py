from typing import Optional
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.auth import security, user_crud
from eventhub.auth.schemas_auth import IdentityClaims
from eventhub.database import get_db
from eventhub.exceptions import AuthenticationError, AuthorizationError
from eventhub.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_identity_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> IdentityClaims:
    if credentials is None:
        raise AuthenticationError("Unauthorized")
    claims = security.decode_access_token(credentials.credentials)
    if claims is None:
        raise AuthenticationError("Unauthorized")
    return claims


async def get_current_user(
    claims: IdentityClaims = Depends(get_identity_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await user_crud.get_user_by_id(db, user_id=claims.sub)
    if user is None:
        logger.warning(f"No user record for token subject {claims.sub}; login required.")
        raise AuthenticationError("Unauthorized")
    return user


async def get_current_admin_user(
    current_user: User = Depends(get_current_user),
) -> User:
    if not current_user.is_admin:
        logger.warning(f"Non-admin user {current_user.id} attempted admin action.")
        raise AuthorizationError("Unauthorized access")
    return current_user
