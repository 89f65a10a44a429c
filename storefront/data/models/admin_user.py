from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from storefront.data.database import Base, new_id


class AdminUserModel(Base):
    __tablename__ = "admin_users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
