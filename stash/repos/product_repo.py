# stash/repos/product_repo.py
from datetime import datetime

from sqlalchemy import select, update, and_, or_, exists
from sqlalchemy.orm import Session

from stash.data.models.product import ProductModel, ProductTagModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def get_products_by_ids(self, product_ids: list[str]):
        """
        Single batch read projecting only id, name and price.
        Ids that no longer exist are simply absent from the result.
        """
        if not product_ids:
            return []
        return self.db.execute(
            select(ProductModel.id, ProductModel.name, ProductModel.price)
            .where(ProductModel.id.in_(product_ids))
        ).all()

    def query_published(
        self,
        category: str | None,
        tag: str | None,
        ascending: bool,
        limit: int,
        after: tuple[datetime, str] | None = None,
    ) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.status == "published")

        if category:
            stmt = stmt.where(ProductModel.category == category)

        if tag:
            stmt = stmt.where(
                exists().where(
                    ProductTagModel.product_id == ProductModel.id,
                    ProductTagModel.tag == tag,
                )
            )

        # keyset pagination on (created_at, id)
        if after:
            created_at, last_id = after
            if ascending:
                stmt = stmt.where(or_(
                    ProductModel.created_at > created_at,
                    and_(ProductModel.created_at == created_at, ProductModel.id > last_id),
                ))
            else:
                stmt = stmt.where(or_(
                    ProductModel.created_at < created_at,
                    and_(ProductModel.created_at == created_at, ProductModel.id < last_id),
                ))

        if ascending:
            stmt = stmt.order_by(ProductModel.created_at.asc(), ProductModel.id.asc())
        else:
            stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())

        return list(self.db.execute(stmt.limit(limit)).scalars().all())

    def update_product_version(self, product_id: str, old_version: int, new_data: dict) -> int:
        # update products set ..., version = 3 where id = :id and version = 2
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.version == old_version)
            .values(**new_data)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
