"""Version information for polydispatch."""

__version__ = "1.0.0"
