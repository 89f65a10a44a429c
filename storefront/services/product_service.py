# storefront/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.domain.errors import NotFound
from storefront.domain.schemas import ProductOut
from storefront.repos.product_repo import ProductRepo


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, category: str | None = None) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products(category)]

    def get_product(self, product_id: str) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return ProductOut.model_validate(product)
