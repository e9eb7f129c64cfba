"""
Pytest configuration and shared fixtures.
"""
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add src to path for internal imports
src_path = Path(__file__).parent.parent / 'src'
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from brand_pricing.engine.models import PriceRule
from brand_pricing.services import PricingService
from brand_pricing.storage import InMemoryRepository, SqlRepository


def utc(*args) -> datetime:
    """Shorthand for a UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


def make_rule(start, end, priority=0, price=100, brand_id=1, product_id=3, currency="EUR") -> PriceRule:
    """Build a PriceRule with defaults for the fields a test doesn't care about."""
    return PriceRule(
        brand_id=brand_id,
        product_id=product_id,
        start_date=start,
        end_date=end,
        priority=priority,
        price=price,
        currency=currency,
    )


def build_repository(backend: str, tmp_path: Path):
    if backend == "sql":
        return SqlRepository(f"sqlite:///{tmp_path / 'pricing.db'}")
    return InMemoryRepository()


@pytest.fixture(params=["memory", "sql"])
def repository(request, tmp_path):
    """Every repository backend, so contract tests run against each."""
    repo = build_repository(request.param, tmp_path)
    yield repo
    repo.shutdown()


@pytest.fixture
def memory_repository():
    repo = InMemoryRepository()
    yield repo
    repo.shutdown()


@pytest.fixture
def sql_repository(tmp_path):
    repo = SqlRepository(f"sqlite:///{tmp_path / 'pricing.db'}")
    yield repo
    repo.shutdown()


@pytest.fixture
def service(memory_repository):
    return PricingService(memory_repository)
