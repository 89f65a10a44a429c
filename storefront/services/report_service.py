# storefront/services/report_service.py
from sqlalchemy.orm import Session

from storefront.domain.enums import OrderStatus, EnquiryStatus
from storefront.domain.schemas import DashboardOut, OrderSummary, EnquiryOut
from storefront.repos.enquiry_repo import EnquiryRepo
from storefront.repos.order_repo import OrderRepo

RECENT_LIMIT = 5


class ReportService:
    """Read-only dashboard figures, recomputed on every call."""

    def __init__(self, db: Session):
        self.orders = OrderRepo(db)
        self.enquiries = EnquiryRepo(db)

    def dashboard(self) -> DashboardOut:
        orders_by_status = {s.value: 0 for s in OrderStatus}
        orders_by_status.update(self.orders.count_by_status())

        enquiries_by_status = {s.value: 0 for s in EnquiryStatus}
        enquiries_by_status.update(self.enquiries.count_by_status())

        return DashboardOut(
            total_orders=sum(orders_by_status.values()),
            total_revenue=self.orders.revenue(excluded_status=OrderStatus.CANCELLED.value),
            pending_orders=orders_by_status[OrderStatus.PENDING.value],
            new_enquiries=enquiries_by_status[EnquiryStatus.NEW.value],
            orders_by_status=orders_by_status,
            enquiries_by_status=enquiries_by_status,
            recent_orders=[
                OrderSummary.model_validate(o) for o in self.orders.list_orders(limit=RECENT_LIMIT)
            ],
            recent_enquiries=[
                EnquiryOut.model_validate(e) for e in self.enquiries.list_enquiries(limit=RECENT_LIMIT)
            ],
        )
