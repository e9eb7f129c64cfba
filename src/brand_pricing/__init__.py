"""
Brand Pricing Package

Resolves the sale price that applies to a brand's product at a given instant
from a set of overlapping, date-bounded, priority-ranked price rules.
"""

__version__ = "1.0.0"
