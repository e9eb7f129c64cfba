#!/usr/bin/env python
"""
Run the pricing API.

Usage:
    PRICING_BACKEND=sql PRICING_DATABASE_URL=... python scripts/run_api.py

See brand_pricing.config.settings for every PRICING_* variable.
"""
import sys
from pathlib import Path

import uvicorn

# Add src to path for running from a checkout without installing
src_path = Path(__file__).parent.parent / 'src'
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from brand_pricing.config.logging import get_logging_config
from brand_pricing.config.settings import get_settings


def main():
    settings = get_settings()

    print(f"Starting Pricing API on {settings.host}:{settings.port} (backend={settings.backend})...")
    try:
        uvicorn.run(
            "brand_pricing.api.main:app",
            host=settings.host,
            port=settings.port,
            log_config=get_logging_config(settings.environment, settings.log_level),
        )
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
