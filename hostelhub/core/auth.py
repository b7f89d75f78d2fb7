"""
Authentication utilities: password hashing, bearer token issue/verification,
and the request-scoped current actor.

The frontend logs in through POST /auth/login and sends the returned JWT in
the Authorization header. This module verifies the JWT and loads the actor
from the users table, so role and residence always reflect the stored profile.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from hostelhub.core.database import get_db
from hostelhub.core.config import settings
from hostelhub.core.exceptions import ForbiddenError, UnauthorizedError
from hostelhub.models.enums import Role
from hostelhub.models.user import User

# Security scheme for Bearer token; missing headers are reported as 401 below
security = HTTPBearer(auto_error=False)


class Actor:
    """The authenticated identity performing an operation."""
    def __init__(
        self,
        user_id: int,
        role: Role,
        name: str = "",
        email: Optional[str] = None,
        hostel: Optional[str] = None,
        block: Optional[str] = None,
        room: Optional[str] = None,
    ):
        self.id = user_id
        self.role = Role(role)
        self.name = name
        self.email = email
        self.hostel = hostel
        self.block = block
        self.room = room

    @property
    def is_management(self) -> bool:
        return self.role == Role.MANAGEMENT

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(
            user_id=user.id,
            role=user.role,
            name=user.name,
            email=user.email,
            hostel=user.hostel,
            block=user.block,
            room=user.room,
        )

    def __repr__(self) -> str:
        return f"Actor(id={self.id}, role={self.role.value})"


def hash_password(password: str) -> str:
    """Hash a password with bcrypt; returns the $2b$ string form."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
    """
    Issue a signed JWT for the user.

    The payload carries the user id in ``sub`` and the role for clients that
    want to branch on it; the server never trusts the role claim and reloads
    the user on every request.
    """
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verify a JWT and return its decoded payload.

    Raises:
        UnauthorizedError: If the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except JWTError as e:
        raise UnauthorizedError(f"Invalid authentication credentials: {str(e)}")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Actor:
    """
    FastAPI dependency resolving the request to an Actor.

    Usage in route:
        @router.get("/protected")
        def protected_route(current_user: Actor = Depends(get_current_user)):
            return {"user_id": current_user.id}
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    payload = verify_token(credentials.credentials)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthorizedError("Could not validate user")

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Could not validate user")
    return Actor.from_user(user)


def require_role(required_role: Role):
    """
    Dependency factory for role-gated routes.

    Usage:
        @router.get("/audit-logs")
        def list_logs(current_user: Actor = Depends(require_role(Role.MANAGEMENT))):
            ...
    """
    def role_checker(current_user: Actor = Depends(get_current_user)) -> Actor:
        if current_user.role != required_role:
            raise ForbiddenError(f"Insufficient permissions. Required role: {required_role.value}")
        return current_user
    return role_checker
