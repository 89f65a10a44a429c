# import every model so SQLAlchemy registers it in Base.metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.data.models.admin_user import AdminUserModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.payment import PaymentModel
from storefront.data.models.enquiry import EnquiryModel

__all__ = [
    "ProductModel",
    "UserModel",
    "AdminUserModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "PaymentModel",
    "EnquiryModel",
]
