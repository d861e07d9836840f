"""Shop error kinds.

Code ranges:
  1xxx: missing entities
  2xxx: invalid input
  3xxx: purchase refusals
  4xxx: permissions
  9xxx: store faults

Messages are meant for logs. User-facing text lives in utils.messages.
"""
from typing import Optional


class ShopError(Exception):
    """Base shop error."""

    code = 9000

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# --- 1xxx: NotFound ---

class NotFound(ShopError):
    code = 1000

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ProductNotFound(NotFound):
    code = 1001

    def __init__(self, product_id: str) -> None:
        super().__init__("Product", product_id)


class UserNotFound(NotFound):
    code = 1002

    def __init__(self, user_id: str) -> None:
        super().__init__("User", user_id)


class OrderNotFound(NotFound):
    code = 1003

    def __init__(self, order_id: str) -> None:
        super().__init__("Order", order_id)


# --- 2xxx: ValidationError ---

class ValidationError(ShopError):
    code = 2000


class InvalidAmount(ValidationError):
    code = 2001

    def __init__(self, amount: object, reason: str = "amount must be positive") -> None:
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class ImmutableRecord(ValidationError):
    code = 2002

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} is a ledger record and cannot be changed")


# --- 3xxx: Purchase ---

class OutOfStock(ShopError):
    code = 3001

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product out of stock: {product_id}")


class InsufficientFunds(ShopError):
    code = 3002

    def __init__(self, required, available) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: required {required}, available {available}")


# --- 4xxx: Permissions ---

class PermissionDenied(ShopError):
    code = 4001

    def __init__(self, user_id: str, action: str) -> None:
        self.user_id = user_id
        self.action = action
        super().__init__(f"User {user_id} may not {action}")


# --- 9xxx: Store ---

class StoreUnavailable(ShopError):
    code = 9001

    def __init__(self, cause: Optional[BaseException] = None, detail: str = "") -> None:
        self.cause = cause
        message = detail or f"Data store call failed: {cause!r}"
        super().__init__(message)
