#!/usr/bin/env python
"""
Load the example brand and price rules into the configured backend.

Usage:
    PRICING_BACKEND=sql PRICING_DATABASE_URL=... python scripts/seed_database.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from brand_pricing.config.logging import configure_logging
from brand_pricing.config.settings import get_settings
from brand_pricing.data.seed import seed_example_data
from brand_pricing.engine.exceptions import PricingError
from brand_pricing.services import PricingService
from brand_pricing.storage import create_repository


def main():
    settings = get_settings()
    configure_logging(settings)

    if settings.backend == 'memory':
        print("WARNING: memory backend selected, seeded data is lost when this script exits")

    service = PricingService(create_repository(settings))
    try:
        count = seed_example_data(service, settings.example_prices_csv)
    except PricingError as e:
        print(f"\n❌ SEED FAILED: {e.message}")
        sys.exit(1)
    finally:
        service.shutdown()

    if count == 0:
        print("✅ Example brand already present, nothing to seed")
    else:
        print(f"✅ Seeded {count} price rules")


if __name__ == "__main__":
    main()
