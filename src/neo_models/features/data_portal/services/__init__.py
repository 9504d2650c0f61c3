"""Data portal services package."""

from .data_portal import DataPortal, ActionRun, data_portal

__all__ = [
    "DataPortal",
    "ActionRun",
    "data_portal",
]
