import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.exceptions import ForbiddenError, UnauthorizedError
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(user_id, name: str, roles: Iterable[str], expires_minutes: Optional[int] = None) -> str:
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "name": name,
        "roles": [str(getattr(r, "value", r)) for r in roles],
        "exp": expires,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except ExpiredSignatureError:
        raise UnauthorizedError(
            "Token has expired", AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED)
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")

    if not payload.get("sub"):
        raise UnauthorizedError("Invalid token structure")

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]

    return UserToken(
        user_id=payload["sub"],
        name=payload.get("name"),
        roles=roles,
        exp=payload.get("exp"),
    )


def validate_current_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> UserToken:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    return verify_token(credentials.credentials)


def ensure_role(principal: Optional[UserToken], *roles: str) -> UserToken:
    if principal is None:
        raise UnauthorizedError("Authentication required")

    if not principal.has_role(*roles):
        logger.warning("User %s lacks any of roles %s",
                       principal.name, [str(getattr(r, "value", r)) for r in roles])
        raise ForbiddenError("Access forbidden: insufficient role")

    return principal


def require_roles(*roles: str):
    """Dependency factory gating a route to callers holding any of ``roles``."""

    def checker(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
        return ensure_role(current_user, *roles)

    return checker
