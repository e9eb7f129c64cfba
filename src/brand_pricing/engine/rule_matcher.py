"""
Rule Matcher - Finds the price rule that applies at a given instant.

Used by the in-memory repository; the SQL repository expresses the same
filter and ordering as a query.
"""
from datetime import datetime
from dataclasses import dataclass
from typing import Iterable, Optional

from .models import PriceRule, to_utc


@dataclass(frozen=True)
class StoredRule:
    """A rule together with its insertion sequence number."""
    sequence: int
    rule: PriceRule


def precedence(stored: StoredRule) -> tuple[int, int]:
    """
    Sort key ranking rules from most to least preferred.

    Higher priority first; on equal priority the rule inserted first wins.
    """
    return (-stored.rule.priority, stored.sequence)


def select_rule(
    rules: Iterable[StoredRule],
    brand_id: int,
    product_id: int,
    date: datetime
) -> Optional[PriceRule]:
    """Return the winning rule at ``date``, or None if no rule covers it."""
    best = None
    date = to_utc(date)

    # Single O(n) pass; the lowest precedence key wins
    for stored in rules:
        rule = stored.rule
        if rule.brand_id != brand_id or rule.product_id != product_id:
            continue
        # Both window ends are inclusive
        if not rule.covers(date):
            continue
        if best is None or precedence(stored) < precedence(best):
            best = stored

    return best.rule if best else None
