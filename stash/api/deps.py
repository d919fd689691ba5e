# stash/api/deps.py
"""
Authorization gate and service wiring.

Routes compose the gate from two steps: ``get_current_user`` (token ->
user id -> user record) and, where a role is needed, ``require_roles(...)``,
which depends on the first so authentication always runs before the role
check.
"""
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from stash.data.database import get_db
from stash.data.models.user import UserModel
from stash.domain.errors import Forbidden, Unauthenticated
from stash.services.credentials import decode_access_token
from stash.services.payment_gateway import PaymentGateway
from stash.services.upload_service import build_s3_client
from stash.services.user_service import UserService


def authenticate(x_auth_token: str | None = Header(None)) -> str:
    if not x_auth_token:
        raise Unauthenticated("No token, authorization denied")
    return decode_access_token(x_auth_token)


def get_current_user(
    user_id: str = Depends(authenticate),
    db: Session = Depends(get_db),
) -> UserModel:
    # direct lookup by the id embedded in the token
    user = UserService(db).get_user(user_id)
    if not user:
        raise Unauthenticated("Token is not valid")
    return user


def require_roles(*roles: str):
    allowed = frozenset(roles)

    def check_roles(user: UserModel = Depends(get_current_user)) -> UserModel:
        if not allowed.intersection(user.roles or []):
            raise Forbidden("User role not authorized to access this route")
        return user

    return check_roles


def get_payment_gateway() -> PaymentGateway:
    return PaymentGateway()


@lru_cache
def get_s3_client():
    return build_s3_client()
