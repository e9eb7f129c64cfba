"""
Data models for the pricing engine.

Uses frozen dataclasses so records handed out by a repository can never be
mutated behind its back.
"""
from dataclasses import dataclass
from datetime import datetime, timezone


def to_utc(value: datetime) -> datetime:
    """Normalize a timestamp to UTC. Naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_minor_units(amount: int) -> str:
    """Render an amount in minor units as a decimal string, e.g. 3550 -> "35.50"."""
    sign = "-" if amount < 0 else ""
    major, minor = divmod(abs(amount), 100)
    return f"{sign}{major}.{minor:02d}"


@dataclass(frozen=True)
class Brand:
    """A registered brand. ``id`` is assigned by the repository."""
    id: int
    name: str


@dataclass(frozen=True)
class PriceRule:
    """
    A price that applies to one brand's product during a date window.

    When the windows of several rules contain the same instant, the rule
    with the higher ``priority`` wins.
    """
    brand_id: int
    product_id: int
    start_date: datetime
    end_date: datetime
    priority: int
    price: int  # minor currency units, e.g. cents
    currency: str  # ISO-4217 code

    def __post_init__(self):
        object.__setattr__(self, 'start_date', to_utc(self.start_date))
        object.__setattr__(self, 'end_date', to_utc(self.end_date))

    def covers(self, date: datetime) -> bool:
        """True if ``date`` falls inside the window, both ends included."""
        return self.start_date <= date <= self.end_date

    def resolve(self) -> 'ResolvedPrice':
        """The externally visible result when this rule wins."""
        return ResolvedPrice(
            brand_id=self.brand_id,
            product_id=self.product_id,
            start_date=self.start_date,
            end_date=self.end_date,
            price=self.price,
            currency=self.currency,
        )


@dataclass(frozen=True)
class ResolvedPrice:
    """The winning rule's own window and price, without its priority."""
    brand_id: int
    product_id: int
    start_date: datetime
    end_date: datetime
    price: int
    currency: str

    def __post_init__(self):
        object.__setattr__(self, 'start_date', to_utc(self.start_date))
        object.__setattr__(self, 'end_date', to_utc(self.end_date))

    @property
    def display_price(self) -> str:
        """Price as a decimal string for presentation."""
        return format_minor_units(self.price)
