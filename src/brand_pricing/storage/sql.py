"""
SQLAlchemy implementation of PriceRepository.

Works against any database SQLAlchemy can reach; PostgreSQL in production,
SQLite in tests. Price resolution runs as a single ordered query instead of
a scan in Python.
"""
import logging
import threading
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Index, Integer, MetaData, String, create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ..engine.exceptions import (
    BackendFailureError,
    BrandNotFoundError,
    DuplicateBrandError,
    PriceNotFoundError,
)
from ..engine.models import Brand, PriceRule, ResolvedPrice, to_utc
from .repository import PriceRepository

logger = logging.getLogger(__name__)

# A concurrent writer in another process can take the computed id once
BRAND_INSERT_ATTEMPTS = 2

# Name every constraint so drop_all/create_all behave the same on all dialects
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

Base = declarative_base(metadata=MetaData(naming_convention=naming_convention))


class BrandRow(Base):
    __tablename__ = "brand"

    # Assigned by the repository, not the database, so failed inserts leave no gaps
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, unique=True)


class PriceRow(Base):
    __tablename__ = "price"

    # Insertion order, used to break priority ties
    id = Column(Integer, primary_key=True, autoincrement=True)
    brand_id = Column(Integer, nullable=False)
    product_id = Column(Integer, nullable=False)
    start_date = Column(DateTime, nullable=False)  # naive UTC
    end_date = Column(DateTime, nullable=False)  # naive UTC
    priority = Column(Integer, nullable=False, default=0)
    price = Column(Integer, nullable=False)
    curr = Column(String(3), nullable=False)

    __table_args__ = (
        Index("ix_price_brand_product", "brand_id", "product_id"),
    )


def to_db_datetime(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC so every dialect compares them the same way."""
    return to_utc(value).replace(tzinfo=None)


def build_engine(database_url: str) -> Engine:
    """Create an engine, allowing SQLite connections to cross threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


class SqlRepository(PriceRepository):
    """
    Relational repository.

    Brand ids are computed as ``max(id) + 1`` inside the insert transaction.
    A process-wide lock serializes registrations from this process and the
    unique constraint on ``brand.name`` catches races with other processes.
    An id taken by another process between the ``max`` read and the insert
    is recomputed once before the failure is reported as a backend error.
    """

    def __init__(self, database_url: str, engine: Optional[Engine] = None, create_schema: bool = True):
        self.database_url = database_url
        self._engine = engine or build_engine(database_url)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._brand_lock = threading.Lock()
        self._closed = False

        if create_schema:
            try:
                Base.metadata.create_all(self._engine)
            except SQLAlchemyError as exc:
                raise BackendFailureError("create_schema", exc) from exc

    def add_brand(self, name: str) -> None:
        with self._brand_lock:
            for attempt in range(1, BRAND_INSERT_ATTEMPTS + 1):
                try:
                    with self._session_factory.begin() as session:
                        existing = session.scalar(select(BrandRow.id).where(BrandRow.name == name))
                        if existing is not None:
                            raise DuplicateBrandError(name)

                        next_id = self._next_brand_id(session)
                        session.add(BrandRow(id=next_id, name=name))
                    break
                except IntegrityError as exc:
                    # Lost a race with another process
                    if self._brand_exists(name):
                        raise DuplicateBrandError(name) from exc
                    if attempt < BRAND_INSERT_ATTEMPTS:
                        logger.warning("Brand id %d was taken while registering %s, retrying", next_id, name)
                        continue
                    logger.error("Brand insert for %s failed: %s", name, exc)
                    raise BackendFailureError("add_brand", exc) from exc
                except SQLAlchemyError as exc:
                    logger.error("Brand insert for %s failed: %s", name, exc)
                    raise BackendFailureError("add_brand", exc) from exc

        logger.info("Registered brand %s with id %d", name, next_id)

    def _next_brand_id(self, session: Session) -> int:
        return session.scalar(select(func.coalesce(func.max(BrandRow.id), 0))) + 1

    def _brand_exists(self, name: str) -> bool:
        try:
            with self._session_factory() as session:
                return session.scalar(select(BrandRow.id).where(BrandRow.name == name)) is not None
        except SQLAlchemyError as exc:
            raise BackendFailureError("add_brand", exc) from exc

    def get_brand(self, name: str) -> Brand:
        try:
            with self._session_factory() as session:
                row = session.scalar(select(BrandRow).where(BrandRow.name == name))
        except SQLAlchemyError as exc:
            logger.error("Brand lookup for %s failed: %s", name, exc)
            raise BackendFailureError("get_brand", exc) from exc

        if row is None:
            raise BrandNotFoundError(name)
        return Brand(id=row.id, name=row.name)

    def add_price(self, rule: PriceRule) -> None:
        row = PriceRow(
            brand_id=rule.brand_id,
            product_id=rule.product_id,
            start_date=to_db_datetime(rule.start_date),
            end_date=to_db_datetime(rule.end_date),
            priority=rule.priority,
            price=rule.price,
            curr=rule.currency,
        )
        try:
            with self._session_factory.begin() as session:
                session.add(row)
        except SQLAlchemyError as exc:
            logger.error("Price insert failed: %s", exc)
            raise BackendFailureError("add_price", exc) from exc

    def get_price(self, brand_id: int, product_id: int, date: datetime) -> ResolvedPrice:
        date = to_utc(date)
        at = to_db_datetime(date)

        stmt = (
            select(PriceRow)
            .where(
                PriceRow.brand_id == brand_id,
                PriceRow.product_id == product_id,
                PriceRow.start_date <= at,
                PriceRow.end_date >= at,
            )
            .order_by(PriceRow.priority.desc(), PriceRow.id.asc())
            .limit(1)
        )
        try:
            with self._session_factory() as session:
                row = session.scalar(stmt)
        except SQLAlchemyError as exc:
            logger.error("Price lookup failed: %s", exc)
            raise BackendFailureError("get_price", exc) from exc

        if row is None:
            raise PriceNotFoundError(brand_id, product_id, date)

        return ResolvedPrice(
            brand_id=row.brand_id,
            product_id=row.product_id,
            start_date=row.start_date,
            end_date=row.end_date,
            price=row.price,
            currency=row.curr,
        )

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._engine.dispose()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Error while closing database connections: %s", exc)
