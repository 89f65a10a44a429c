from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Numeric, Text

from storefront.data.database import Base, new_id


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=True, index=True)

    status = Column(String(20), nullable=False, default="pending")  # pending, processing, shipped, delivered, cancelled
    total = Column(Numeric(12, 2), nullable=False)
    # serialized JSON
    shipping_address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
