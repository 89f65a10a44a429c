# storefront/api/routers/contact.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import EnquiryIn, MessageOut
from storefront.services.enquiry_service import EnquiryService

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact", response_model=MessageOut)
def submit_enquiry(payload: EnquiryIn, db: Session = Depends(get_db)):
    EnquiryService(db).submit(payload)
    return MessageOut(message="Thank you for your enquiry. We will get back to you soon!")
