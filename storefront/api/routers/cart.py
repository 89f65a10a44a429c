# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartQuantityIn, CartView, MessageOut
from storefront.services.auth_service import Identity
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartView)
def get_cart(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).list_cart(user.subject_id)


@router.post("", response_model=MessageOut)
def add_item(
    payload: CartItemIn,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).add_item(user.subject_id, payload.product_id, payload.quantity)
    return MessageOut(message="Item added to cart successfully")


@router.put("/{item_id}", response_model=MessageOut)
def update_item(
    item_id: str,
    payload: CartQuantityIn,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = get_service(db).set_quantity(user.subject_id, item_id, payload.quantity)
    if item is None:
        return MessageOut(message="Item removed from cart successfully")
    return MessageOut(message="Cart item updated successfully")


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: str,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).remove_item(user.subject_id, item_id)
    return MessageOut(message="Item removed from cart successfully")


@router.delete("", response_model=MessageOut)
def clear_cart(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    get_service(db).clear_cart(user.subject_id)
    return MessageOut(message="Cart cleared successfully")
