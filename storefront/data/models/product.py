from sqlalchemy import Column, Integer, String, Text, Numeric

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    # catalog slug, e.g. "zeus-whey"
    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    image = Column(String(255), nullable=True)
    category = Column(String(64), nullable=True, index=True)
    stock = Column(Integer, nullable=False, default=100)
