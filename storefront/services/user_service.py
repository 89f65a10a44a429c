# storefront/services/user_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from storefront.data.transaction import atomic
from storefront.domain.enums import UserStatus
from storefront.domain.errors import NotFound, InvalidArgument
from storefront.domain.schemas import UserStats, UserDetail, OrderSummary
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

RECENT_ORDERS_LIMIT = 5


class UserService:
    """Back-office view of customer accounts."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)
        self.orders = OrderRepo(db)
        self.carts = CartRepo(db)

    def list_users(self) -> List[UserStats]:
        users = self.repo.list_users()
        stats = self.orders.user_order_stats([u.id for u in users])
        return [self._stats(u, stats.get(u.id)) for u in users]

    def get_user(self, user_id: str) -> UserDetail:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        stats = self.orders.user_order_stats([user.id]).get(user.id)
        recent = self.orders.list_orders(user_id=user.id, limit=RECENT_ORDERS_LIMIT)

        return UserDetail(
            **self._stats(user, stats).model_dump(),
            recent_orders=[OrderSummary.model_validate(o) for o in recent],
        )

    def update_status(self, user_id: str, status: str) -> UserStats:
        try:
            new_status = UserStatus(status)
        except ValueError:
            raise InvalidArgument(f"Unknown user status '{status}'")

        with atomic(self.db, "Update user status"):
            user = self.repo.get_user(user_id)
            if not user:
                raise NotFound("User not found")
            user.status = new_status.value

        logger.info(f"User {user_id} status set to {new_status.value}")
        return self._stats(user, self.orders.user_order_stats([user.id]).get(user.id))

    def delete_user(self, user_id: str) -> None:
        """Removes the account with its cart, orders, order items and payments."""
        with atomic(self.db, "Delete user"):
            if not self.repo.get_user(user_id):
                raise NotFound("User not found")
            self.carts.clear_cart(user_id)
            orders = self.orders.delete_orders_for_user(user_id)
            self.repo.delete_user(user_id)

        logger.info(f"User {user_id} deleted with {orders} orders")

    @staticmethod
    def _stats(user, stats) -> UserStats:
        count, spent, last = stats or (0, 0, None)
        return UserStats(
            id=user.id,
            email=user.email,
            name=user.name,
            status=user.status,
            created_at=user.created_at,
            order_count=count,
            total_spent=Decimal(str(spent)),
            last_order_date=last,
        )
