#stash/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from stash.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    artist_id = Column(String(32), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False)  # minor currency units
    category = Column(String(100), nullable=True)

    status = Column(String(20), nullable=False, default="pending_approval")
    preview_image_keys = Column(JSON, nullable=False, default=list)
    s3_asset_key = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    version = Column(Integer, nullable=False, default=1)

    tag_rows = relationship(
        "ProductTagModel",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductTagModel.tag",
    )

    # public listing walks this index: status equality, created_at order
    __table_args__ = (Index("ix_products_status_created_at", "status", "created_at", "id"),)

    @property
    def tags(self) -> list[str]:
        return [t.tag for t in self.tag_rows]

    @tags.setter
    def tags(self, values):
        existing = {t.tag: t for t in self.tag_rows}
        self.tag_rows = [existing.get(v) or ProductTagModel(tag=v) for v in dict.fromkeys(values or [])]


class ProductTagModel(Base):
    __tablename__ = "product_tags"

    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    tag = Column(String(100), primary_key=True, index=True)

    product = relationship("ProductModel", back_populates="tag_rows")
