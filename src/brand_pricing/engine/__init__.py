"""Engine subpackage - data model, errors and price resolution."""
from .models import Brand, PriceRule, ResolvedPrice, format_minor_units, to_utc
from .exceptions import (
    PricingError,
    DuplicateBrandError,
    NotFoundError,
    BrandNotFoundError,
    PriceNotFoundError,
    BackendFailureError,
)
from .rule_matcher import StoredRule, precedence, select_rule

__all__ = [
    'Brand', 'PriceRule', 'ResolvedPrice', 'format_minor_units', 'to_utc',
    'PricingError', 'DuplicateBrandError', 'NotFoundError', 'BrandNotFoundError',
    'PriceNotFoundError', 'BackendFailureError',
    'StoredRule', 'precedence', 'select_rule',
]
