from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stash.api.deps import get_current_user
from stash.data.database import get_db
from stash.data.models.user import UserModel
from stash.domain.schemas import Credentials, LoginIn, TokenOut, UserOut
from stash.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenOut, status_code=201)
def register(payload: Credentials, db: Session = Depends(get_db)):
    return UserService(db).register(payload.email, payload.password)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    return UserService(db).login(payload.email, payload.password)


@router.get("/me", response_model=UserOut)
def me(user: UserModel = Depends(get_current_user)):
    return UserService.to_public(user)
