"""
Shared service instance for the API.

Built from settings on first use and torn down when the app stops.
"""
import logging
import threading
from typing import Optional

from ..config.settings import get_settings
from ..data.seed import seed_example_data
from ..services.pricing_service import PricingService
from ..storage import create_repository

logger = logging.getLogger(__name__)

_service: Optional[PricingService] = None
_lock = threading.Lock()


def get_service() -> PricingService:
    """FastAPI dependency returning the process-wide pricing service."""
    global _service
    with _lock:
        if _service is None:
            settings = get_settings()
            repository = create_repository(settings)
            try:
                service = PricingService(repository)
                if settings.seed_example_data:
                    seed_example_data(service, settings.example_prices_csv)
            except Exception:
                logger.exception("Pricing service setup failed (backend=%s)", settings.backend)
                repository.shutdown()
                raise
            logger.info("Pricing service ready (backend=%s)", settings.backend)
            _service = service
    return _service


def close_service():
    """Shut down the service if one was created."""
    global _service
    with _lock:
        if _service is not None:
            _service.shutdown()
            _service = None
