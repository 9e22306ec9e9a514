"""Version information for gw."""

__version__ = "0.4.0"
