import uuid

from sqlalchemy.orm import Session

from stash.data.models.user import UserModel
from stash.domain.errors import InvalidState, ValidationError
from stash.domain.schemas import TokenOut, UserOut
from stash.repos.user_repo import UserRepo
from stash.services.credentials import create_access_token, hash_password, verify_password
from stash.utils.logging import get_logger

logger = get_logger(__name__)

# one message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid Credentials"


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, email: str, password: str, roles: list[str] | None = None) -> TokenOut:
        email = email.lower()
        user = UserModel(
            id=uuid.uuid4().hex,
            email=email,
            password_hash=hash_password(password),
            roles=roles or ["customer"],
        )

        created = self.repo.create_user(user)
        if created is None:
            raise ValidationError("User already exists")

        logger.info(f"Registered user {created.id}")
        return TokenOut(token=create_access_token(created.id))

    def login(self, email: str, password: str) -> TokenOut:
        user = self.repo.get_user_by_email(email.lower())
        if not user or not verify_password(password, user.password_hash):
            raise InvalidState(INVALID_CREDENTIALS)
        return TokenOut(token=create_access_token(user.id))

    def get_user(self, user_id: str) -> UserModel | None:
        return self.repo.get_user(user_id)

    @staticmethod
    def to_public(user: UserModel) -> UserOut:
        return UserOut.model_validate(user)
