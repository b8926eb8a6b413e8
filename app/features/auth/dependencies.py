from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.features.auth.models import User
from app.features.auth.service import AuthService
from app.core.security import decode_token
from app.core.storage import KeyValueStore, MongoKeyValueStore
from app.shared.exceptions import CredentialsException, BadRequestException


# HTTP Bearer security scheme
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """Staff user identified by the bearer token."""
    claims = decode_token(credentials.credentials)
    if claims is None:
        raise CredentialsException("Invalid authentication credentials")
    
    user = await AuthService.get_user_by_email(claims["sub"])
    if user is None:
        raise CredentialsException("User not found")
    
    if not user.is_active:
        raise CredentialsException("Inactive user")
    
    return user


def require_organization(user: User) -> str:
    """Return the user's organization id, or reject users without one."""
    if not user.organization_id:
        raise BadRequestException("You must be associated with an organization")
    return user.organization_id


async def get_user_store(
    current_user: User = Depends(get_current_user)
) -> KeyValueStore:
    """Per-user key/value store for dismissal flags."""
    return MongoKeyValueStore(namespace=f"user:{current_user.id}")
