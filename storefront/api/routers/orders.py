# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_lock_service, get_notification_service
from storefront.data.database import get_db
from storefront.domain.schemas import OrderCreate, PlaceOrderOut, OrderView
from storefront.services.auth_service import Identity
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
):
    return OrderService(db, lock_service=lock_service, notification_service=notification_service)


@router.post("", response_model=PlaceOrderOut)
def create_order(
    payload: OrderCreate,
    user: Identity = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Places an order from the whole cart of the caller and empties the cart.
    """
    order_id = svc.place_order(user.subject_id, payload.shipping_address)
    return PlaceOrderOut(order_id=order_id)


@router.get("", response_model=List[OrderView])
def list_orders(
    user: Identity = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user.subject_id)
