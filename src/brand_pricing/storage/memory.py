"""
In-memory repository implementation.

Keeps brands in a dict and price rules in a list behind a reader/writer
lock. Lookups scan every stored rule.
"""
import logging
from datetime import datetime

from ..engine.exceptions import BrandNotFoundError, DuplicateBrandError, PriceNotFoundError
from ..engine.models import Brand, PriceRule, ResolvedPrice, to_utc
from ..engine.rule_matcher import StoredRule, select_rule
from .locks import ReadWriteLock
from .repository import PriceRepository

logger = logging.getLogger(__name__)


class InMemoryRepository(PriceRepository):
    """Process-local repository, primarily for development and testing."""

    def __init__(self):
        self._brands: dict[str, int] = {}  # name -> id
        self._rules: list[StoredRule] = []
        self._lock = ReadWriteLock()

    def add_brand(self, name: str) -> None:
        with self._lock.write():
            if name in self._brands:
                raise DuplicateBrandError(name)
            # Ids start from 1 to match the SQL backend
            brand_id = len(self._brands) + 1
            self._brands[name] = brand_id

        logger.info("Registered brand %s with id %d", name, brand_id)

    def get_brand(self, name: str) -> Brand:
        with self._lock.read():
            brand_id = self._brands.get(name)

        if brand_id is None:
            raise BrandNotFoundError(name)
        return Brand(id=brand_id, name=name)

    def add_price(self, rule: PriceRule) -> None:
        with self._lock.write():
            self._rules.append(StoredRule(sequence=len(self._rules), rule=rule))

    def get_price(self, brand_id: int, product_id: int, date: datetime) -> ResolvedPrice:
        date = to_utc(date)

        with self._lock.read():
            winner = select_rule(self._rules, brand_id, product_id, date)

        if winner is None:
            raise PriceNotFoundError(brand_id, product_id, date)
        return winner.resolve()

    def shutdown(self) -> None:
        # Nothing to release
        logger.debug("In-memory repository shut down")
