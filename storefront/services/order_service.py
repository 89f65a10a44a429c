# storefront/services/order_service.py
import json
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.payment import PaymentModel
from storefront.data.transaction import atomic
from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.domain.errors import NotFound, InvalidArgument, EmptyCart, Conflict
from storefront.domain.schemas import (
    ShippingAddress,
    OrderItemOut,
    OrderView,
    AdminOrderView,
    PaymentOut,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.cart_service import cart_total
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def items_summary(items) -> str:
    """Legacy "product:qty:price,..." rendering of order lines."""
    return ",".join(f"{i.product_id}:{i.quantity}:{i.price}" for i in items)


def parse_status(status: str) -> OrderStatus:
    try:
        return OrderStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidArgument(f"Unknown order status '{status}', expected one of: {allowed}")


class OrderService:
    """
    The checkout workflow plus order queries for customers and admins.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.users = UserRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def place_order(self, user_id: str, shipping_address: ShippingAddress | dict | None) -> str:
        """
        Use Case: turn the user's cart into an order.

        1. Loads the cart (EmptyCart when there is nothing to buy)
        2. Totals it with the snapshot prices stored on the cart lines
        3. Creates the order (pending)
        4. Copies every cart line into an immutable order item
        5. Records the payment (always completed, no gateway)
        6. Deletes exactly the cart lines read in step 1
        7. Enqueues the confirmation after commit

        Steps 3-6 commit together or not at all. Placement is serialized per
        user by the checkout lock; the delete count check in step 6 catches a
        checkout that consumed the same cart anyway.
        """
        lock_service = self.lock_service or LockService()
        with lock_service.checkout_lock(user_id):
            with atomic(self.db, "Place order"):
                cart_items = self.cart_repo.get_cart_items(user_id)

                if not cart_items:
                    logger.warning(f"User {user_id} tried to check out an empty cart")
                    raise EmptyCart("Cart is empty")

                total = cart_total(cart_items)

                order = self.repo.create_order(
                    OrderModel(
                        user_id=user_id,
                        status=OrderStatus.PENDING.value,
                        total=total,
                        shipping_address=self._serialize_address(shipping_address),
                    )
                )

                self.repo.add_order_items(
                    [
                        OrderItemModel(
                            order_id=order.id,
                            product_id=i.product_id,
                            quantity=i.quantity,
                            price=i.price,
                        )
                        for i in cart_items
                    ]
                )

                self.repo.create_payment(
                    PaymentModel(
                        order_id=order.id,
                        amount=total,
                        status=PaymentStatus.COMPLETED.value,
                    )
                )

                deleted = self.cart_repo.delete_items(user_id, [i.id for i in cart_items])
                if deleted != len(cart_items):
                    logger.warning(
                        f"Cart of user {user_id} changed during checkout "
                        f"({deleted} of {len(cart_items)} lines left), rolling back"
                    )
                    raise Conflict("Cart changed during checkout, retry")

                order_id = order.id

        logger.info(f"Order {order_id} placed by user {user_id}, total {total}, {len(cart_items)} lines")

        self.notification_service.send_order_notification(user_id, order_id, str(total))

        return order_id

    @staticmethod
    def _serialize_address(shipping_address) -> str | None:
        if shipping_address is None:
            return None
        if isinstance(shipping_address, ShippingAddress):
            shipping_address = shipping_address.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(shipping_address)

    # =====================================================
    # QUERIES
    # =====================================================
    def list_orders(self, user_id: str) -> List[OrderView]:
        orders = self.repo.list_orders(user_id=user_id)
        items = self.repo.get_order_items([o.id for o in orders])
        return [self._view(o, items[o.id]) for o in orders]

    def list_all(self, status: str | None = None) -> List[AdminOrderView]:
        if status:
            parse_status(status)
        orders = self.repo.list_orders(status=status)
        items = self.repo.get_order_items([o.id for o in orders])
        users = self.users.get_users([o.user_id for o in orders if o.user_id])
        return [self._admin_view(o, items[o.id], users.get(o.user_id)) for o in orders]

    def get_admin_order(self, order_id: str) -> AdminOrderView:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        items = self.repo.get_order_items([order.id])[order.id]
        user = self.users.get_user(order.user_id) if order.user_id else None
        return self._admin_view(order, items, user)

    def list_payments(self, status: str | None = None) -> List[PaymentOut]:
        return [PaymentOut.model_validate(p) for p in self.repo.list_payments(status=status)]

    # =====================================================
    # COMMANDS (admin)
    # =====================================================
    def update_status(self, order_id: str, status: str) -> OrderView:
        """
        Admin transitions are unconditional: any known status may follow any other.
        """
        new_status = parse_status(status)

        with atomic(self.db, "Update order status"):
            order = self.repo.update_order_status(order_id, new_status.value)
            if not order:
                raise NotFound("Order not found")

        logger.info(f"Order {order_id} status set to {new_status.value}")

        items = self.repo.get_order_items([order.id])[order.id]
        return self._view(order, items)

    # =====================================================
    # VIEWS
    # =====================================================
    @staticmethod
    def _view(order: OrderModel, items) -> OrderView:
        return OrderView(
            id=order.id,
            user_id=order.user_id,
            total=Decimal(order.total),
            status=order.status,
            created_at=order.created_at,
            shipping_address=json.loads(order.shipping_address) if order.shipping_address else None,
            items=items_summary(items),
            line_items=[OrderItemOut.model_validate(i) for i in items],
        )

    def _admin_view(self, order: OrderModel, items, user) -> AdminOrderView:
        view = self._view(order, items)
        return AdminOrderView(**view.model_dump(), user_email=user.email if user else "N/A")
