from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from stash.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    # composite key makes the item list a set
    user_id = Column(String(32), ForeignKey("carts.user_id", ondelete="CASCADE"), primary_key=True)
    product_id = Column(String(255), primary_key=True)

    added_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    cart = relationship("CartModel", back_populates="items")
