# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_admin
from storefront.data.database import get_db
from storefront.domain.schemas import (
    AdminLoginIn,
    AdminAuthOut,
    AdminOrderView,
    DashboardOut,
    EnquiryOut,
    MessageOut,
    PaymentOut,
    StatusUpdateIn,
    UserDetail,
    UserStats,
)
from storefront.services.auth_service import AuthService
from storefront.services.enquiry_service import EnquiryService
from storefront.services.order_service import OrderService
from storefront.services.report_service import ReportService
from storefront.services.user_service import UserService

router = APIRouter(prefix="/api/admin", tags=["admin"])

# every route below login requires an admin token
secured = [Depends(get_current_admin)]


def get_order_service(db: Session = Depends(get_db)):
    # admin order routes only read and relabel, they never check out
    return OrderService(db)


@router.post("/login", response_model=AdminAuthOut)
def admin_login(payload: AdminLoginIn, db: Session = Depends(get_db)):
    return AuthService(db).admin_login(payload.username, payload.password)


@router.get("/dashboard", response_model=DashboardOut, dependencies=secured)
def dashboard(db: Session = Depends(get_db)):
    return ReportService(db).dashboard()


# =====================================================
# ORDERS
# =====================================================
@router.get("/orders", response_model=List[AdminOrderView], dependencies=secured)
def list_orders(status: str | None = Query(None), svc: OrderService = Depends(get_order_service)):
    return svc.list_all(status)


@router.get("/orders/{order_id}", response_model=AdminOrderView, dependencies=secured)
def get_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    return svc.get_admin_order(order_id)


@router.put("/orders/{order_id}/status", response_model=MessageOut, dependencies=secured)
def update_order_status(
    order_id: str,
    payload: StatusUpdateIn,
    svc: OrderService = Depends(get_order_service),
):
    svc.update_status(order_id, payload.status)
    return MessageOut(message="Order status updated successfully")


@router.get("/payments", response_model=List[PaymentOut], dependencies=secured)
def list_payments(status: str | None = Query(None), svc: OrderService = Depends(get_order_service)):
    return svc.list_payments(status)


# =====================================================
# ENQUIRIES
# =====================================================
@router.get("/enquiries", response_model=List[EnquiryOut], dependencies=secured)
def list_enquiries(status: str | None = Query(None), db: Session = Depends(get_db)):
    return EnquiryService(db).list_enquiries(status)


@router.get("/enquiries/{enquiry_id}", response_model=EnquiryOut, dependencies=secured)
def get_enquiry(enquiry_id: str, db: Session = Depends(get_db)):
    return EnquiryService(db).get_enquiry(enquiry_id)


@router.put("/enquiries/{enquiry_id}/status", response_model=MessageOut, dependencies=secured)
def update_enquiry_status(enquiry_id: str, payload: StatusUpdateIn, db: Session = Depends(get_db)):
    EnquiryService(db).update_status(enquiry_id, payload.status)
    return MessageOut(message="Enquiry status updated successfully")


# =====================================================
# USERS
# =====================================================
@router.get("/users", response_model=List[UserStats], dependencies=secured)
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()


@router.get("/users/{user_id}", response_model=UserDetail, dependencies=secured)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)


@router.put("/users/{user_id}/status", response_model=MessageOut, dependencies=secured)
def update_user_status(user_id: str, payload: StatusUpdateIn, db: Session = Depends(get_db)):
    UserService(db).update_status(user_id, payload.status)
    return MessageOut(message="User status updated successfully")


@router.delete("/users/{user_id}", response_model=MessageOut, dependencies=secured)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    UserService(db).delete_user(user_id)
    return MessageOut(message="User deleted successfully")
