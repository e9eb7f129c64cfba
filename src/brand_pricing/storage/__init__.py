"""Storage subpackage - repository contract and its backends."""
from ..config.settings import Settings
from .repository import PriceRepository
from .memory import InMemoryRepository
from .sql import SqlRepository


def create_repository(settings: Settings) -> PriceRepository:
    """Build the repository selected by ``settings.backend``."""
    if settings.backend == 'sql':
        return SqlRepository(settings.database_url)
    return InMemoryRepository()


__all__ = ['PriceRepository', 'InMemoryRepository', 'SqlRepository', 'create_repository']
