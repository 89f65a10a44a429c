# storefront/repos/enquiry_repo.py
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.enquiry import EnquiryModel


class EnquiryRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_enquiry(self, enquiry: EnquiryModel) -> EnquiryModel:
        self.db.add(enquiry)
        self.db.flush()
        return enquiry

    def get_enquiry(self, enquiry_id: str) -> EnquiryModel | None:
        return self.db.get(EnquiryModel, enquiry_id)

    def list_enquiries(self, status: str | None = None, limit: int | None = None) -> List[EnquiryModel]:
        stmt = select(EnquiryModel).order_by(EnquiryModel.created_at.desc())
        if status:
            stmt = stmt.where(EnquiryModel.status == status)
        if limit:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def update_status(self, enquiry_id: str, status: str) -> EnquiryModel | None:
        enquiry = self.get_enquiry(enquiry_id)
        if enquiry:
            enquiry.status = status
            self.db.flush()
        return enquiry

    def count_by_status(self) -> dict:
        rows = self.db.execute(
            select(EnquiryModel.status, func.count()).group_by(EnquiryModel.status)
        ).all()
        return {status: count for status, count in rows}
