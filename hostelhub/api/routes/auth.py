from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_db
from hostelhub.core.auth import Actor, get_current_user
from hostelhub.core.exceptions import NotFoundError
from hostelhub.models.user import User
from hostelhub.schemas.user import Token, UserLogin, UserOut, UserRegister
from hostelhub.services import users

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    return users.register_user(db, payload)


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    return Token(access_token=users.authenticate(db, payload))


@router.get("/me", response_model=UserOut)
def me(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    user = db.get(User, current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return user
