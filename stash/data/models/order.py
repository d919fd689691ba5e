from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime, timezone

from stash.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(40), primary_key=True)
    user_id = Column(String(32), nullable=False, index=True)

    items = Column(JSON, nullable=False)  # [{productId, name, price}], snapshot at creation
    total_amount = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending_payment")  # pending_payment, completed
    payment_intent_id = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
