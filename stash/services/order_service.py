# stash/services/order_service.py
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stash.data.models.order import OrderModel
from stash.domain.errors import InvalidState, NotFound
from stash.domain.schemas import OrderOut
from stash.repos.cart_repo import CartRepo
from stash.repos.order_repo import OrderRepo
from stash.repos.product_repo import ProductRepo
from stash.services.cart_service import CartService
from stash.utils.logging import get_logger

logger = get_logger(__name__)


def new_order_id() -> str:
    return f"ord_{uuid.uuid4()}"


class OrderService:
    """
    Orders are created from the user's cart and carry a copy of each
    product's name and price, so later catalogue edits never touch them.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.cart_service = CartService(db)

    def create_order_from_cart(self, user_id: str) -> OrderOut:
        """
        Use Case: cart -> order.

        1. Load the cart, refuse an empty one
        2. One batch read of the referenced products (id, name, price)
        3. Refuse if any product is gone, cart stays as it is
        4. Sum prices, write the order (commit point)
        5. Clear the cart, a failure here leaves the order in place
        """
        cart = self.cart_repo.get_cart(user_id)
        cart_items = self.cart_repo.get_cart_items(user_id) if cart else []

        if not cart_items:
            raise InvalidState("Cart is empty")

        product_ids = [i.product_id for i in cart_items]
        rows = self.product_repo.get_products_by_ids(product_ids)

        if len(rows) != len(product_ids):
            logger.info(f"Order for user {user_id} refused, cart references missing products")
            raise InvalidState("One or more products in the cart could not be found.")

        by_id = {row.id: row for row in rows}
        items = [
            {
                "productId": pid,
                "name": by_id[pid].name,
                "price": int(by_id[pid].price),  # price at the time of order
            }
            for pid in product_ids
        ]
        total = sum(item["price"] for item in items)

        order = OrderModel(
            id=new_order_id(),
            user_id=user_id,
            items=items,
            total_amount=total,
            status="pending_payment",
        )
        created = self.repo.create_order(order)

        logger.info(f"Order {created.id} created for user {user_id}, total {total}")

        try:
            self.cart_service.clear_cart(user_id)
        except SQLAlchemyError:
            self.cart_repo.rollback()
            logger.exception(f"Order {created.id} created but cart of user {user_id} was not cleared")

        return OrderOut.model_validate(created)

    def get_order(self, order_id: str, user_id: str) -> OrderOut:
        order = self.repo.get_order(order_id, user_id)
        if not order:
            raise NotFound("Order not found")
        return OrderOut.model_validate(order)

    def list_orders(self, user_id: str) -> list[OrderOut]:
        return [OrderOut.model_validate(o) for o in self.repo.list_orders(user_id)]
