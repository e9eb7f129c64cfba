"""
Pricing exceptions.

Every error raised by a repository or the service derives from PricingError
and carries a machine-readable code alongside the message.
"""
from typing import Optional


class PricingError(Exception):
    """Base exception for all pricing errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        """
        Initialize pricing exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class DuplicateBrandError(PricingError):
    """Raised when a brand name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Brand '{name}' already exists", code="DUPLICATE_BRAND")
        self.name = name


class NotFoundError(PricingError):
    """Raised when a lookup matches nothing."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class BrandNotFoundError(NotFoundError):
    """Raised when no brand is registered under a name."""

    def __init__(self, name: str):
        super().__init__(f"Brand '{name}' not found", code="BRAND_NOT_FOUND")
        self.name = name


class PriceNotFoundError(NotFoundError):
    """Raised when no price rule covers the requested instant."""

    def __init__(self, brand_id: int, product_id: int, date):
        super().__init__(
            f"No price found for brand {brand_id}, product {product_id} at {date.isoformat()}",
            code="PRICE_NOT_FOUND",
        )
        self.brand_id = brand_id
        self.product_id = product_id
        self.date = date


class BackendFailureError(PricingError):
    """Raised when the storage backend itself fails. Wraps the underlying error."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Storage backend failed during {operation}{detail}", code="BACKEND_FAILURE")
        self.operation = operation
        self.cause = cause
