# storefront/repos/product_repo.py
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids) -> dict:
        if not product_ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(set(product_ids)))
        ).scalars().all()
        return {p.id: p for p in rows}

    def list_products(self, category: str | None = None) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.name)
        if category:
            stmt = stmt.where(ProductModel.category == category)
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def add_all(self, products: List[ProductModel]) -> None:
        self.db.add_all(products)
