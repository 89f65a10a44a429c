# storefront/domain/errors.py


class StoreError(Exception):
    """Base class for errors rendered to clients as {"error", "code"}."""

    code = "internal"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(StoreError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class InvalidArgument(StoreError):
    code = "invalid_argument"
    status_code = 400
    default_message = "Invalid argument"


class EmptyCart(StoreError):
    code = "empty_cart"
    status_code = 400
    default_message = "Cart is empty"


class Unauthorized(StoreError):
    code = "unauthorized"
    status_code = 401
    default_message = "Access token required"


class Forbidden(StoreError):
    code = "forbidden"
    status_code = 403
    default_message = "Invalid token"


class Conflict(StoreError):
    code = "conflict"
    status_code = 409
    default_message = "Conflicting operation in progress"


class Internal(StoreError):
    pass
