from sqlalchemy.orm import Session

from stash.domain.schemas import CartOut
from stash.repos.cart_repo import CartRepo
from stash.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    One cart per user, holding a set of product ids.
    A missing cart is a valid empty state, never an error.
    Product ids are not checked against the catalogue here; a dangling id
    surfaces when the order is created.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    #query
    def get_cart(self, user_id: str) -> CartOut:
        cart = self.repo.get_cart(user_id)
        if not cart:
            return CartOut(user_id=user_id, items=[], updated_at=None)

        items = self.repo.get_cart_items(user_id)
        return CartOut(
            user_id=user_id,
            items=[i.product_id for i in items],
            updated_at=cart.updated_at,
        )

    #commands
    def add_item(self, user_id: str, product_id: str) -> CartOut:
        self.repo.add_item(user_id, product_id)
        logger.info(f"Product {product_id} added to cart of user {user_id}")
        return self.get_cart(user_id)

    def remove_item(self, user_id: str, product_id: str) -> CartOut:
        self.repo.remove_item(user_id, product_id)
        logger.info(f"Product {product_id} removed from cart of user {user_id}")
        return self.get_cart(user_id)

    def clear_cart(self, user_id: str) -> None:
        self.repo.delete_cart(user_id)
        logger.info(f"Cart of user {user_id} cleared")
