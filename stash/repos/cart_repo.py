# stash/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stash.data.models.cart import CartModel
from stash.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, user_id: str) -> CartModel | None:
        return self.db.get(CartModel, user_id)

    def get_cart_items(self, user_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.added_at, CartItemModel.product_id)
            ).scalars().all()
        )

    def add_item(self, user_id: str, product_id: str) -> None:
        """Set-add: creates the cart on first use, a product already in the cart is a no-op."""
        for attempt in range(2):
            now = datetime.now(timezone.utc)
            cart = self.get_cart(user_id)
            if cart is None:
                self.db.add(CartModel(user_id=user_id, updated_at=now))
            else:
                cart.updated_at = now

            if self.db.get(CartItemModel, (user_id, product_id)) is None:
                self.db.add(CartItemModel(user_id=user_id, product_id=product_id, added_at=now))

            try:
                self.db.commit()
                return
            except IntegrityError:
                # a concurrent request inserted the same cart or item first
                self.db.rollback()
                if attempt:
                    raise

    def remove_item(self, user_id: str, product_id: str) -> None:
        cart = self.get_cart(user_id)
        if cart is None:
            return
        self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        )
        cart.updated_at = datetime.now(timezone.utc)
        self.db.commit()

    def delete_cart(self, user_id: str) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
        self.db.execute(delete(CartModel).where(CartModel.user_id == user_id))
        self.db.commit()

    def rollback(self):
        self.db.rollback()
