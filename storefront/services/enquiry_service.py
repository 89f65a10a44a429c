# storefront/services/enquiry_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.enquiry import EnquiryModel
from storefront.data.transaction import atomic
from storefront.domain.enums import EnquiryStatus
from storefront.domain.errors import NotFound, InvalidArgument
from storefront.domain.schemas import EnquiryIn, EnquiryOut
from storefront.repos.enquiry_repo import EnquiryRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class EnquiryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = EnquiryRepo(db)

    def submit(self, payload: EnquiryIn) -> EnquiryOut:
        with atomic(self.db, "Submit enquiry"):
            enquiry = self.repo.create_enquiry(
                EnquiryModel(
                    name=payload.name,
                    email=payload.email,
                    message=payload.message,
                    status=EnquiryStatus.NEW.value,
                )
            )
        logger.info(f"Enquiry {enquiry.id} received")
        return EnquiryOut.model_validate(enquiry)

    def list_enquiries(self, status: str | None = None) -> List[EnquiryOut]:
        return [EnquiryOut.model_validate(e) for e in self.repo.list_enquiries(status=status)]

    def get_enquiry(self, enquiry_id: str) -> EnquiryOut:
        enquiry = self.repo.get_enquiry(enquiry_id)
        if not enquiry:
            raise NotFound("Enquiry not found")
        return EnquiryOut.model_validate(enquiry)

    def update_status(self, enquiry_id: str, status: str) -> EnquiryOut:
        try:
            new_status = EnquiryStatus(status)
        except ValueError:
            raise InvalidArgument(f"Unknown enquiry status '{status}'")

        with atomic(self.db, "Update enquiry status"):
            enquiry = self.repo.update_status(enquiry_id, new_status.value)
            if not enquiry:
                raise NotFound("Enquiry not found")

        logger.info(f"Enquiry {enquiry_id} status set to {new_status.value}")
        return EnquiryOut.model_validate(enquiry)
