# stash/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stash.api.deps import get_current_user
from stash.data.database import get_db
from stash.data.models.user import UserModel
from stash.domain.schemas import OrderOut
from stash.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Turns the current user's cart into an order awaiting payment.
    """
    return get_service(db).create_order_from_cart(user.id)


@router.get("", response_model=List[OrderOut])
def list_orders(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).list_orders(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order(order_id, user.id)
