"""Version information for neo-models."""

__version__ = "0.1.0"
