# stash/api/routers/products.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stash.api.deps import get_current_user, require_roles
from stash.data.database import get_db
from stash.data.models.user import UserModel
from stash.domain.schemas import (
    AssetIn,
    MessageOut,
    PreviewIn,
    ProductCreate,
    ProductOut,
    ProductPage,
    ProductUpdate,
)
from stash.services.product_service import MAX_PAGE_SIZE, ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    user: UserModel = Depends(require_roles("artist", "admin")),
    db: Session = Depends(get_db),
):
    return get_service(db).create_product(user, payload)


@router.get("", response_model=ProductPage)
def list_products(
    category: str | None = None,
    tag: str | None = None,
    order: str = "desc",
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    last_key: str | None = Query(None, alias="lastKey"),
    db: Session = Depends(get_db),
):
    """Published products only, newest first unless order=asc (any other value sorts descending)."""
    return get_service(db).list_products(
        category=category,
        tag=tag,
        order=order,
        limit=limit,
        last_key=last_key,
    )


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return get_service(db).get_product(product_id)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).update_product(product_id, user, payload)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).delete_product(product_id, user)
    return MessageOut(msg="Product removed")


@router.put("/{product_id}/asset", response_model=ProductOut)
def set_asset(
    product_id: str,
    payload: AssetIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).set_asset(product_id, user, payload.s3_asset_key)


@router.post("/{product_id}/previews", response_model=ProductOut)
def add_preview(
    product_id: str,
    payload: PreviewIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).add_preview(product_id, user, payload.preview_image_key)
