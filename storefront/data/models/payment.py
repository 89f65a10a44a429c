from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, ForeignKey, Numeric

from storefront.data.database import Base, new_id


class PaymentModel(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, unique=True)
    amount = Column(Numeric(12, 2), nullable=False)
    method = Column(String(20), nullable=False, default="online")
    status = Column(String(20), nullable=False, default="completed")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
