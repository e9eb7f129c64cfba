"""
Example data loader.

Reads price rules from a CSV export and loads them, together with the brand
they belong to, into a repository or service.
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..config.settings import get_package_root
from ..engine.exceptions import DuplicateBrandError
from ..engine.models import PriceRule
from ..services.pricing_service import PricingService
from ..storage.repository import PriceRepository

logger = logging.getLogger(__name__)

# Timestamp layout used by the source price exports, e.g. 2020-06-14-00.00.00
DATE_FORMAT = "%Y-%m-%d-%H.%M.%S"

REQUIRED_COLUMNS = ['brand_id', 'start_date', 'end_date', 'priority', 'product_id', 'price', 'curr']

EXAMPLE_PRICES_CSV = get_package_root() / 'data' / 'example_prices.csv'


def load_price_rules(path: Path) -> list[PriceRule]:
    """
    Parse price rules from a CSV file.

    Dates are read as UTC. Raises FileNotFoundError if the file is missing
    and ValueError if required columns are absent.
    """
    if not path.exists():
        raise FileNotFoundError(f"Price file not found at {path}")

    df = pd.read_csv(path, dtype=str)
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name} is missing columns: {', '.join(missing)}")

    # Strip all strings
    for col in REQUIRED_COLUMNS:
        df[col] = df[col].str.strip()

    for col in ('start_date', 'end_date'):
        df[col] = pd.to_datetime(df[col], format=DATE_FORMAT, utc=True)
    df['curr'] = df['curr'].str.upper()

    return [
        PriceRule(
            brand_id=int(row.brand_id),
            product_id=int(row.product_id),
            start_date=row.start_date.to_pydatetime(),
            end_date=row.end_date.to_pydatetime(),
            priority=int(row.priority),
            price=int(row.price),
            currency=row.curr,
        )
        for row in df.itertuples(index=False)
    ]


def seed_example_data(
    target: Union[PricingService, PriceRepository],
    path: Optional[Path] = None,
    brand_name: str = "EXAMPLE"
) -> int:
    """
    Register ``brand_name`` and add every rule from ``path``.

    The rules are stored under the id the registry assigns to the brand,
    whatever ``brand_id`` the file carries. If the brand is already
    registered the store is assumed to be seeded and nothing is added.

    Returns the number of rules added.
    """
    rules = load_price_rules(path or EXAMPLE_PRICES_CSV)

    try:
        target.add_brand(brand_name)
    except DuplicateBrandError:
        logger.info("Brand %s already registered, skipping example data", brand_name)
        return 0

    brand_id = target.get_brand(brand_name).id
    for rule in rules:
        target.add_price(replace(rule, brand_id=brand_id))

    logger.info("Seeded brand %s (id %d) with %d price rules", brand_name, brand_id, len(rules))
    return len(rules)
