"""
Expose common test utilities so tests can import directly:
    from tests import make_offer, make_assumptions
"""

from .utils import make_assumptions, make_offer, make_offer_set

__all__ = ["make_assumptions", "make_offer", "make_offer_set"]
