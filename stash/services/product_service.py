# stash/services/product_service.py
import base64
import binascii
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy.orm import Session

from stash.data.models.product import ProductModel
from stash.data.models.user import UserModel
from stash.domain.errors import Forbidden, InvalidState, NotFound, ValidationError
from stash.domain.schemas import ProductCreate, ProductOut, ProductPage, ProductUpdate
from stash.repos.product_repo import ProductRepo
from stash.utils.logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


def encode_page_key(product: ProductModel) -> str:
    raw = json.dumps({"createdAt": product.created_at.isoformat(), "id": product.id})
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_page_key(key: str) -> tuple[datetime, str]:
    try:
        data = json.loads(base64.urlsafe_b64decode(key.encode("ascii")).decode("utf-8"))
        created_at = datetime.fromisoformat(data["createdAt"])
        product_id = str(data["id"])
    except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError):
        raise ValidationError("Invalid pagination key")
    return created_at, product_id


class ProductService:
    """
    Catalogue use cases.
    Public reads see published products only through list_products; writes
    need the owning artist or an admin.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    #query
    def get_product(self, product_id: str) -> ProductOut:
        return ProductOut.model_validate(self._get_or_404(product_id))

    def list_products(
        self,
        category: str | None = None,
        tag: str | None = None,
        order: str = "desc",
        limit: int = 10,
        last_key: str | None = None,
    ) -> ProductPage:
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        after = decode_page_key(last_key) if last_key else None

        # one extra row tells whether another page exists
        rows = self.repo.query_published(
            category=category,
            tag=tag,
            ascending=order == "asc",
            limit=limit + 1,
            after=after,
        )
        page = rows[:limit]
        next_key = encode_page_key(page[-1]) if len(rows) > limit else None

        return ProductPage(
            items=[ProductOut.model_validate(p) for p in page],
            next_key=next_key,
        )

    #commands
    def create_product(self, artist: UserModel, payload: ProductCreate) -> ProductOut:
        now = datetime.now(timezone.utc)
        product = ProductModel(
            id=str(uuid.uuid4()),
            artist_id=artist.id,
            name=payload.name,
            description=payload.description,
            price=payload.price,
            category=payload.category,
            tags=payload.tags,
            status="pending_approval",
            preview_image_keys=[],
            s3_asset_key="",
            created_at=now,
            updated_at=now,
            version=1,
        )
        created = self.repo.create_product(product)

        logger.info(f"Product {created.id} created by artist {artist.id}")
        return ProductOut.model_validate(created)

    def update_product(self, product_id: str, user: UserModel, payload: ProductUpdate) -> ProductOut:
        product = self._get_owned(product_id, user)

        changes: Dict[str, Any] = payload.model_dump(exclude_unset=True, exclude={"tags"})
        if "name" in changes and changes["name"] is None:
            raise ValidationError("name cannot be empty")
        if "price" in changes and changes["price"] is None:
            raise ValidationError("price cannot be empty")

        if payload.tags is not None:
            product.tags = payload.tags

        return self._versioned_write(product, changes)

    def set_asset(self, product_id: str, user: UserModel, s3_asset_key: str) -> ProductOut:
        product = self._get_owned(product_id, user)
        return self._versioned_write(product, {"s3_asset_key": s3_asset_key})

    def add_preview(self, product_id: str, user: UserModel, preview_image_key: str) -> ProductOut:
        product = self._get_owned(product_id, user)
        keys = list(product.preview_image_keys or []) + [preview_image_key]
        return self._versioned_write(product, {"preview_image_keys": keys})

    def delete_product(self, product_id: str, user: UserModel) -> None:
        product = self._get_owned(product_id, user)
        self.repo.delete_product(product)
        logger.info(f"Product {product_id} deleted by user {user.id}")

    # helpers
    def _get_or_404(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def _get_owned(self, product_id: str, user: UserModel) -> ProductModel:
        # existence is reported before permission
        product = self._get_or_404(product_id)
        if product.artist_id != user.id and "admin" not in (user.roles or []):
            raise Forbidden("User not authorized to modify this product")
        return product

    def _versioned_write(self, product: ProductModel, changes: Dict[str, Any]) -> ProductOut:
        old_version = product.version
        new_data = dict(changes)
        new_data["version"] = old_version + 1
        new_data["updated_at"] = datetime.now(timezone.utc)

        # Optimistic locking
        rowcount = self.repo.update_product_version(
            product_id=product.id,
            old_version=old_version,
            new_data=new_data,
        )

        if rowcount == 0:
            self.repo.rollback()
            raise InvalidState("Product was modified by another request")

        self.repo.commit()

        logger.info(f"Product {product.id} updated, new version: {old_version + 1}")
        return ProductOut.model_validate(self.repo.get_product(product.id))
