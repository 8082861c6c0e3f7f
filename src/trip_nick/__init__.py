"""Trip Nick travel-sharing backend."""

__version__ = "0.1.0"
