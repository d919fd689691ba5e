# stash/services/upload_service.py
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from stash.domain.errors import UpstreamFailure
from stash.utils.logging import get_logger
from stash.utils.settings import AWS_REGION, AWS_S3_BUCKET_NAME, UPLOAD_URL_EXPIRES_SECONDS

logger = get_logger(__name__)


def build_s3_client(region: str = AWS_REGION):
    # credentials come from the standard AWS environment chain
    return boto3.client("s3", region_name=region, config=Config(signature_version="s3v4"))


def object_key(upload_type: str, artist_id: str, product_id: str, file_type: str) -> str:
    parts = file_type.split("/", 1)
    extension = parts[1] if len(parts) == 2 and parts[1] else "zip"  # image/png -> png
    return f"{upload_type}s/{artist_id}/{product_id}/{uuid.uuid4()}.{extension}"


class UploadService:
    """Pre-signed PUT urls so clients upload assets and previews straight to S3."""

    def __init__(
        self,
        s3_client,
        bucket: str = AWS_S3_BUCKET_NAME,
        expires_in: int = UPLOAD_URL_EXPIRES_SECONDS,
    ):
        self.s3 = s3_client
        self.bucket = bucket
        self.expires_in = expires_in

    def create_upload_url(self, artist_id: str, product_id: str, file_type: str, upload_type: str) -> dict:
        key = object_key(upload_type, artist_id, product_id, file_type)

        try:
            url = self.s3.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": file_type},
                ExpiresIn=self.expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Pre-signing {key} failed: {e}")
            raise UpstreamFailure("Storage error") from e

        logger.info(f"Upload url issued for {key}, valid {self.expires_in}s")
        return {"upload_url": url, "key": key}
