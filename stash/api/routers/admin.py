from fastapi import APIRouter, Depends

from stash.api.deps import require_roles
from stash.data.models.user import UserModel
from stash.domain.schemas import MessageOut

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/test", response_model=MessageOut)
def admin_test(user: UserModel = Depends(require_roles("admin"))):
    return MessageOut(msg=f"Welcome Admin {user.email}! You have permission.")
