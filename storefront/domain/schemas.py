# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal
from datetime import datetime


class CamelModel(BaseModel):
    """Payloads the storefront client exchanges in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================
# AUTH
# =====================================================
class RegisterIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminLoginIn(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class PublicUser(BaseModel):
    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    token: str
    user: PublicUser


class PublicAdmin(BaseModel):
    id: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class AdminAuthOut(BaseModel):
    token: str
    admin: PublicAdmin


# =====================================================
# CATALOG
# =====================================================
class ProductOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    image: str | None = None
    category: str | None = None
    stock: int

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CART
# =====================================================
# upper bound for a single cart line, well inside the Integer column
MAX_LINE_QUANTITY = 10_000


class CartItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: str = Field(..., min_length=1, description="Product slug")
    quantity: int = Field(1, gt=0, le=MAX_LINE_QUANTITY, description="Quantity to add (> 0)")


class CartQuantityIn(BaseModel):
    """Schema for overwriting a cart line quantity; 0 removes the line."""

    quantity: int = Field(..., le=MAX_LINE_QUANTITY)


class CartLine(BaseModel):
    """Cart item joined with the product's current display data."""

    id: str
    product_id: str
    quantity: int
    price: Decimal
    line_total: Decimal
    name: str
    image: str
    description: str


class CartView(BaseModel):
    items: List[CartLine]
    item_count: int
    total: Decimal


class MessageOut(BaseModel):
    message: str


# =====================================================
# ORDERS
# =====================================================
class ShippingAddress(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    phone: str | None = None

    model_config = ConfigDict(extra="allow")


class OrderCreate(CamelModel):
    shipping_address: ShippingAddress


class PlaceOrderOut(CamelModel):
    order_id: str
    message: str = "Order created successfully"


class OrderItemOut(BaseModel):
    product_id: str
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderSummary(BaseModel):
    id: str
    user_id: str | None
    total: Decimal
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderView(OrderSummary):
    """Order with its items, both as the legacy "product:qty:price" string and as a list."""

    shipping_address: dict | None = None
    items: str
    line_items: List[OrderItemOut]


class AdminOrderView(OrderView):
    user_email: str


class StatusUpdateIn(BaseModel):
    status: str = Field(..., min_length=1)


class PaymentOut(BaseModel):
    id: str
    order_id: str
    amount: Decimal
    method: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ENQUIRIES
# =====================================================
class EnquiryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    message: str = Field(..., min_length=1)


class EnquiryOut(BaseModel):
    id: str
    name: str
    email: str
    message: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ADMIN
# =====================================================
class UserStats(BaseModel):
    id: str
    email: str
    name: str
    status: str
    created_at: datetime
    order_count: int
    total_spent: Decimal
    last_order_date: datetime | None = None


class UserDetail(UserStats):
    recent_orders: List[OrderSummary]


class DashboardOut(CamelModel):
    total_orders: int
    total_revenue: Decimal
    pending_orders: int
    new_enquiries: int
    orders_by_status: dict[str, int]
    enquiries_by_status: dict[str, int]
    recent_orders: List[OrderSummary]
    recent_enquiries: List[EnquiryOut]
