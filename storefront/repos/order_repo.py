# storefront/repos/order_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.payment import PaymentModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_items(self, items: List[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def create_payment(self, payment: PaymentModel) -> PaymentModel:
        self.db.add(payment)
        self.db.flush()
        return payment

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: str | None = None, status: str | None = None,
                    limit: int | None = None) -> List[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        if status:
            stmt = stmt.where(OrderModel.status == status)
        if limit:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def get_order_items(self, order_ids: List[str]) -> dict:
        """Order items grouped by order id."""
        grouped = {order_id: [] for order_id in order_ids}
        if not order_ids:
            return grouped
        rows = self.db.execute(
            select(OrderItemModel).where(OrderItemModel.order_id.in_(order_ids))
        ).scalars().all()
        for item in rows:
            grouped[item.order_id].append(item)
        return grouped

    def update_order_status(self, order_id: str, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.flush()
        return order

    def count_by_status(self) -> dict:
        rows = self.db.execute(
            select(OrderModel.status, func.count()).group_by(OrderModel.status)
        ).all()
        return {status: count for status, count in rows}

    def revenue(self, excluded_status: str) -> Decimal:
        value = self.db.execute(
            select(func.coalesce(func.sum(OrderModel.total), 0)).where(OrderModel.status != excluded_status)
        ).scalar_one()
        return Decimal(str(value))

    def user_order_stats(self, user_ids: List[str]) -> dict:
        """user_id -> (order_count, total_spent, last_order_date)."""
        if not user_ids:
            return {}
        rows = self.db.execute(
            select(
                OrderModel.user_id,
                func.count(OrderModel.id),
                func.coalesce(func.sum(OrderModel.total), 0),
                func.max(OrderModel.created_at),
            )
            .where(OrderModel.user_id.in_(user_ids))
            .group_by(OrderModel.user_id)
        ).all()
        return {user_id: (count, spent, last) for user_id, count, spent, last in rows}

    def list_payments(self, status: str | None = None) -> List[PaymentModel]:
        stmt = select(PaymentModel).order_by(PaymentModel.created_at.desc())
        if status:
            stmt = stmt.where(PaymentModel.status == status)
        return list(self.db.execute(stmt).scalars().all())

    def delete_orders_for_user(self, user_id: str) -> int:
        order_ids = select(OrderModel.id).where(OrderModel.user_id == user_id)
        self.db.execute(delete(OrderItemModel).where(OrderItemModel.order_id.in_(order_ids)))
        self.db.execute(delete(PaymentModel).where(PaymentModel.order_id.in_(order_ids)))
        result = self.db.execute(delete(OrderModel).where(OrderModel.user_id == user_id))
        return result.rowcount
