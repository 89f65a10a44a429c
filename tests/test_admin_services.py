from decimal import Decimal

import pytest

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.payment import PaymentModel
from storefront.data.models.enquiry import EnquiryModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFound, InvalidArgument
from storefront.domain.schemas import EnquiryIn
from storefront.repos.enquiry_repo import EnquiryRepo
from storefront.services.enquiry_service import EnquiryService
from storefront.services.report_service import ReportService
from storefront.services.user_service import UserService

ADDRESS = {"firstName": "Alice", "city": "Athens"}


def _enquiry(db, name="Carol", message="Do you ship abroad?"):
    return EnquiryService(db).submit(EnquiryIn(name=name, email="carol@example.com", message=message))


class TestDashboard:
    def test_empty_store(self, seeded_db):
        board = ReportService(seeded_db).dashboard()

        assert board.total_orders == 0
        assert board.total_revenue == Decimal("0")
        assert board.pending_orders == 0
        assert board.new_enquiries == 0
        assert board.recent_orders == []
        assert board.orders_by_status["cancelled"] == 0

    def test_revenue_excludes_cancelled(self, seeded_db, cart_service, order_service):
        cart_service.add_item("u-1", "zeus-whey", 2)
        kept = order_service.place_order("u-1", ADDRESS)
        cart_service.add_item("u-2", "hermes-energy", 1)
        cancelled = order_service.place_order("u-2", ADDRESS)
        cart_service.add_item("u-3", "athena-focus", 1)
        shipped = order_service.place_order("u-3", ADDRESS)

        order_service.update_status(cancelled, "cancelled")
        order_service.update_status(shipped, "shipped")

        board = ReportService(seeded_db).dashboard()

        assert board.total_orders == 3
        assert board.total_revenue == Decimal("5998") + Decimal("1799")
        assert board.pending_orders == 1
        assert board.orders_by_status == {
            "pending": 1,
            "processing": 0,
            "shipped": 1,
            "delivered": 0,
            "cancelled": 1,
        }
        assert kept in {o.id for o in board.recent_orders}

    def test_enquiry_counts_and_recent(self, seeded_db):
        for i in range(7):
            _enquiry(seeded_db, name=f"Visitor {i}")
        first = EnquiryService(seeded_db).list_enquiries()[0]
        EnquiryService(seeded_db).update_status(first.id, "replied")

        board = ReportService(seeded_db).dashboard()

        assert board.new_enquiries == 6
        assert board.enquiries_by_status["replied"] == 1
        assert len(board.recent_enquiries) == 5

    def test_camel_case_payload(self, seeded_db):
        payload = ReportService(seeded_db).dashboard().model_dump(by_alias=True)
        assert {"totalOrders", "totalRevenue", "pendingOrders", "newEnquiries"} <= payload.keys()


class TestUserManagement:
    def test_list_users_with_stats(self, seeded_db, customer, cart_service, order_service):
        user_id, _ = customer
        cart_service.add_item(user_id, "zeus-whey", 1)
        order_service.place_order(user_id, ADDRESS)
        cart_service.add_item(user_id, "hermes-energy", 2)
        order_service.place_order(user_id, ADDRESS)

        stats = UserService(seeded_db).list_users()

        assert len(stats) == 1
        assert stats[0].order_count == 2
        assert stats[0].total_spent == Decimal("2999") + Decimal("2998")
        assert stats[0].last_order_date is not None

    def test_user_without_orders(self, seeded_db, customer):
        stats = UserService(seeded_db).list_users()[0]
        assert stats.order_count == 0
        assert stats.total_spent == Decimal("0")
        assert stats.last_order_date is None

    def test_user_detail_has_recent_orders(self, seeded_db, customer, cart_service, order_service):
        user_id, _ = customer
        for _ in range(6):
            cart_service.add_item(user_id, "olympian-tee", 1)
            order_service.place_order(user_id, ADDRESS)

        detail = UserService(seeded_db).get_user(user_id)

        assert detail.order_count == 6
        assert len(detail.recent_orders) == 5

    def test_missing_user(self, seeded_db):
        with pytest.raises(NotFound):
            UserService(seeded_db).get_user("missing")

    def test_update_status(self, seeded_db, customer):
        user_id, _ = customer
        UserService(seeded_db).update_status(user_id, "suspended")
        assert seeded_db.get(UserModel, user_id).status == "suspended"

    def test_update_status_rejects_unknown(self, seeded_db, customer):
        user_id, _ = customer
        with pytest.raises(InvalidArgument):
            UserService(seeded_db).update_status(user_id, "banished")

    def test_delete_user_removes_everything(self, seeded_db, customer, cart_service, order_service):
        user_id, _ = customer
        cart_service.add_item(user_id, "zeus-whey", 1)
        order_service.place_order(user_id, ADDRESS)
        cart_service.add_item(user_id, "athena-focus", 1)

        cart_service.add_item("bystander", "zeus-whey", 1)
        order_service.place_order("bystander", ADDRESS)

        UserService(seeded_db).delete_user(user_id)

        assert seeded_db.get(UserModel, user_id) is None
        assert seeded_db.query(CartItemModel).filter_by(user_id=user_id).count() == 0
        assert seeded_db.query(OrderModel).filter_by(user_id=user_id).count() == 0
        assert seeded_db.query(OrderModel).count() == 1
        assert seeded_db.query(OrderItemModel).count() == 1
        assert seeded_db.query(PaymentModel).count() == 1

    def test_delete_missing_user(self, seeded_db):
        with pytest.raises(NotFound):
            UserService(seeded_db).delete_user("missing")


class TestEnquiries:
    def test_submit_commits(self, seeded_db):
        created = _enquiry(seeded_db)

        seeded_db.rollback()

        assert seeded_db.get(EnquiryModel, created.id) is not None

    def test_status_update_commits(self, seeded_db):
        created = _enquiry(seeded_db)
        EnquiryService(seeded_db).update_status(created.id, "read")

        seeded_db.rollback()

        assert seeded_db.get(EnquiryModel, created.id).status == "read"

    def test_repo_leaves_the_commit_to_the_caller(self, seeded_db):
        enquiry = EnquiryRepo(seeded_db).create_enquiry(
            EnquiryModel(name="Dan", email="dan@example.com", message="Hi", status="new")
        )
        enquiry_id = enquiry.id

        seeded_db.rollback()

        assert seeded_db.get(EnquiryModel, enquiry_id) is None

    def test_submit_and_read(self, seeded_db):
        created = _enquiry(seeded_db)

        fetched = EnquiryService(seeded_db).get_enquiry(created.id)

        assert fetched.status == "new"
        assert fetched.message == "Do you ship abroad?"

    def test_filter_by_status(self, seeded_db):
        a = _enquiry(seeded_db, name="A")
        _enquiry(seeded_db, name="B")
        EnquiryService(seeded_db).update_status(a.id, "closed")

        closed = EnquiryService(seeded_db).list_enquiries(status="closed")
        assert [e.id for e in closed] == [a.id]

    def test_unknown_status(self, seeded_db):
        created = _enquiry(seeded_db)
        with pytest.raises(InvalidArgument):
            EnquiryService(seeded_db).update_status(created.id, "archived-forever")

    def test_missing(self, seeded_db):
        with pytest.raises(NotFound):
            EnquiryService(seeded_db).get_enquiry("missing")
        with pytest.raises(NotFound):
            EnquiryService(seeded_db).update_status("missing", "read")
