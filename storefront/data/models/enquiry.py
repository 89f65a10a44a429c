from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text

from storefront.data.database import Base, new_id


class EnquiryModel(Base):
    __tablename__ = "enquiries"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="new")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
