from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, UniqueConstraint

from storefront.data.database import Base, new_id


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    product_id = Column(String(64), nullable=False)

    quantity = Column(Integer, nullable=False)
    # price snapshot taken when the item was added
    price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("user_id", "product_id", name="u_cart_user_product"),)
