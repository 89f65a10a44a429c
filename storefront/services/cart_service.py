# storefront/services/cart_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.transaction import atomic
from storefront.domain.errors import NotFound, InvalidArgument
from storefront.domain.schemas import CartLine, CartView, MAX_LINE_QUANTITY
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown Product"


def ensure_owner(item: CartItemModel | None, user_id: str) -> CartItemModel:
    """Ownership predicate checked before every mutation of an existing cart line."""
    if item is None or item.user_id != user_id:
        raise NotFound("Cart item not found")
    return item


def cart_total(items) -> Decimal:
    """Sum of snapshot price x quantity."""
    return sum((Decimal(i.price) * i.quantity for i in items), Decimal("0.00"))


class CartService:
    """
    Use cases of a user's cart.
    commands (add, set quantity, remove, clear) modify state,
    query (list) reads only
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    # query
    def list_cart(self, user_id: str) -> CartView:
        items = self.repo.get_cart_items(user_id)
        products = self.products.get_products([i.product_id for i in items])

        lines: List[CartLine] = []
        for i in items:
            product = products.get(i.product_id)
            # the product may have been removed from the catalog since
            lines.append(
                CartLine(
                    id=i.id,
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price=i.price,
                    line_total=Decimal(i.price) * i.quantity,
                    name=product.name if product else UNKNOWN_PRODUCT_NAME,
                    image=(product.image or "") if product else "",
                    description=(product.description or "") if product else "",
                )
            )

        return CartView(
            items=lines,
            item_count=sum(line.quantity for line in lines),
            total=cart_total(items),
        )

    # commands
    def add_item(self, user_id: str, product_id: str, quantity: int = 1) -> CartItemModel:
        if quantity < 1:
            raise InvalidArgument("Quantity must be greater than 0")
        if quantity > MAX_LINE_QUANTITY:
            raise InvalidArgument(f"Quantity cannot exceed {MAX_LINE_QUANTITY}")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        with atomic(self.db, "Add to cart"):
            existing = self.repo.get_cart_item_for_product(user_id, product_id)

            if existing:
                if existing.quantity + quantity > MAX_LINE_QUANTITY:
                    raise InvalidArgument(f"Quantity cannot exceed {MAX_LINE_QUANTITY}")
                logger.info(
                    f"Product {product_id} already in cart of user {user_id}, "
                    f"quantity {existing.quantity} -> {existing.quantity + quantity}"
                )
                # snapshot price stays as it was when first added
                existing.quantity += quantity
                item = existing
            else:
                logger.info(f"Adding product {product_id} to cart of user {user_id}")
                item = self.repo.add_cart_item(
                    CartItemModel(
                        user_id=user_id,
                        product_id=product_id,
                        quantity=quantity,
                        price=product.price,
                    )
                )

        return item

    def set_quantity(self, user_id: str, cart_item_id: str, quantity: int) -> CartItemModel | None:
        """
        Overwrites the quantity of a cart line. Zero removes the line, since a
        cart never keeps zero-quantity rows. Returns None when removed.
        """
        if quantity < 0:
            raise InvalidArgument("Quantity cannot be negative")
        if quantity > MAX_LINE_QUANTITY:
            raise InvalidArgument(f"Quantity cannot exceed {MAX_LINE_QUANTITY}")

        item = ensure_owner(self.repo.get_cart_item(cart_item_id), user_id)

        if quantity == 0:
            self.remove_item(user_id, cart_item_id)
            return None

        with atomic(self.db, "Update cart item"):
            item.quantity = quantity

        logger.info(f"Cart item {cart_item_id} of user {user_id} set to quantity {quantity}")
        return item

    def remove_item(self, user_id: str, cart_item_id: str) -> None:
        ensure_owner(self.repo.get_cart_item(cart_item_id), user_id)

        with atomic(self.db, "Remove cart item"):
            deleted = self.repo.delete_cart_item(user_id, cart_item_id)
            if deleted == 0:
                raise NotFound("Cart item not found")

        logger.info(f"Cart item {cart_item_id} removed from cart of user {user_id}")

    def clear_cart(self, user_id: str) -> int:
        with atomic(self.db, "Clear cart"):
            deleted = self.repo.clear_cart(user_id)

        logger.info(f"Cart of user {user_id} cleared ({deleted} items)")
        return deleted
