"""Version information for gitid."""

__version__ = "0.3.0"
