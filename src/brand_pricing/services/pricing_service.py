"""
Pricing Service - single entry point for brand and price operations.

Every call goes straight through to the configured repository. The service
is where cross-backend concerns (timeouts, auditing, caching) would attach.
"""
import logging
from datetime import datetime

from ..engine.models import Brand, PriceRule, ResolvedPrice
from ..storage.repository import PriceRepository

logger = logging.getLogger(__name__)


class PricingService:
    """Business-facing wrapper around a PriceRepository."""

    def __init__(self, repository: PriceRepository):
        if repository is None:
            raise ValueError("repository cannot be empty")
        self._repository = repository

    @property
    def repository(self) -> PriceRepository:
        return self._repository

    def add_brand(self, name: str) -> None:
        logger.debug("add_brand name=%s", name)
        self._repository.add_brand(name)

    def get_brand(self, name: str) -> Brand:
        logger.debug("get_brand name=%s", name)
        return self._repository.get_brand(name)

    def add_price(self, rule: PriceRule) -> None:
        """Store a price rule. Validation is left to the caller."""
        logger.debug("add_price brand_id=%d product_id=%d priority=%d",
                     rule.brand_id, rule.product_id, rule.priority)
        self._repository.add_price(rule)

    def get_price(self, brand_id: int, product_id: int, date: datetime) -> ResolvedPrice:
        """
        Return the price to apply for a brand's product at ``date``.

        The price is an integer in the currency's minor unit, e.g. cents.
        """
        logger.debug("get_price brand_id=%d product_id=%d date=%s",
                     brand_id, product_id, date.isoformat())
        return self._repository.get_price(brand_id, product_id, date)

    def shutdown(self) -> None:
        logger.info("Shutting down pricing service")
        self._repository.shutdown()
