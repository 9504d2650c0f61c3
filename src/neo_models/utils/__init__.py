"""Utilities module for neo-models.

Helper functions used throughout the neo-models library.
"""

from .awaitables import maybe_await, gather_all

__all__ = [
    "maybe_await",
    "gather_all",
]
