#stash/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stash.api.deps import get_current_user
from stash.data.database import get_db
from stash.data.models.user import UserModel
from stash.domain.schemas import CartItemIn, CartOut
from stash.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return CartService(db).get_cart(user.id)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).add_item(user.id, payload.product_id)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).remove_item(user.id, product_id)
