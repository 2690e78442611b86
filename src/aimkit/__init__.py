"""aimkit - character profile schema migration toolkit."""

from aimkit.logging_config import configure_logging

__version__ = "0.1.0"

__all__ = ["__version__", "configure_logging"]
