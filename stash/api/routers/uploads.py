from fastapi import APIRouter, Depends

from stash.api.deps import get_s3_client, require_roles
from stash.data.models.user import UserModel
from stash.domain.schemas import UploadUrlIn, UploadUrlOut
from stash.services.upload_service import UploadService

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/url", response_model=UploadUrlOut)
def get_upload_url(
    payload: UploadUrlIn,
    user: UserModel = Depends(require_roles("artist", "admin")),
    s3_client=Depends(get_s3_client),
):
    return UploadService(s3_client).create_upload_url(
        artist_id=user.id,
        product_id=payload.product_id,
        file_type=payload.file_type,
        upload_type=payload.upload_type,
    )
