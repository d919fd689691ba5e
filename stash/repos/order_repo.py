# stash/repos/order_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from stash.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: str, user_id: str) -> OrderModel | None:
        # keyed by (id, owner): someone else's order reads as missing
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()

    def list_orders(self, user_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc())
            ).scalars().all()
        )

    def set_payment_intent(self, order: OrderModel, payment_intent_id: str) -> OrderModel:
        order.payment_intent_id = payment_intent_id
        self.db.commit()
        self.db.refresh(order)
        return order

    def update_order_status(self, order_id: str, user_id: str, status: str) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.user_id == user_id)
            .values(status=status)
        )
        self.db.commit()
        return result.rowcount
