"""A newsgroup server and interactive client speaking a compact binary protocol."""

__version__ = "0.1.0"
__all__ = ["__version__"]