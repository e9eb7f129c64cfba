"""
Price repository interface.

Defines the storage contract every backend implements so the pricing
service never needs to know which one it is talking to.
"""
from abc import ABC, abstractmethod
from datetime import datetime

from ..engine.models import Brand, PriceRule, ResolvedPrice


class PriceRepository(ABC):
    """
    Abstract repository for brands and price rules.

    Implementations must be safe to share between threads.
    """

    @abstractmethod
    def add_brand(self, name: str) -> None:
        """
        Register a brand under the next sequential id, starting at 1.

        Raises:
            DuplicateBrandError: if ``name`` is already registered
        """

    @abstractmethod
    def get_brand(self, name: str) -> Brand:
        """
        Look up a brand by name.

        Raises:
            BrandNotFoundError: if no brand has that name
        """

    @abstractmethod
    def add_price(self, rule: PriceRule) -> None:
        """
        Store a price rule.

        No validation is done here: date ordering, brand existence and
        duplicates are the caller's concern.
        """

    @abstractmethod
    def get_price(self, brand_id: int, product_id: int, date: datetime) -> ResolvedPrice:
        """
        Resolve the price that applies to a product at ``date``.

        Among rules for the brand and product whose window contains ``date``
        (inclusive), the highest priority wins; equal priorities go to the
        rule stored first.

        Raises:
            PriceNotFoundError: if no rule covers ``date``
        """

    @abstractmethod
    def shutdown(self) -> None:
        """Release backend resources. Safe to call more than once; never raises."""
