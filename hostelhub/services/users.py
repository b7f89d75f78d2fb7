import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hostelhub.core.auth import create_access_token, hash_password, verify_password
from hostelhub.core.exceptions import ConflictError, UnauthorizedError
from hostelhub.core.validation import parse_payload
from hostelhub.models.user import User
from hostelhub.schemas.user import UserLogin, UserRegister

logger = logging.getLogger(__name__)


def _clean(value):
    if value is None:
        return None
    value = value.strip()
    return value or None


def register_user(db: Session, payload: Any) -> User:
    data = parse_payload(UserRegister, payload)
    email = data.email.lower()

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")

    user = User(
        name=data.name.strip(),
        email=email,
        hashed_password=hash_password(data.password),
        role=data.role,
        hostel=_clean(data.hostel),
        block=_clean(data.block),
        room=_clean(data.room),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)
    logger.info("Registered %s user %s", user.role.value, user.id)
    return user


def authenticate(db: Session, payload: Any) -> str:
    """Check credentials and return a signed access token."""
    data = parse_payload(UserLogin, payload)
    user = db.query(User).filter(User.email == data.email.lower()).first()
    if user is None or not verify_password(data.password, user.hashed_password):
        raise UnauthorizedError("Invalid email or password")
    return create_access_token(user)
