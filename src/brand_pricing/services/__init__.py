"""Services subpackage - the entry point used by the API."""
from .pricing_service import PricingService

__all__ = ['PricingService']
