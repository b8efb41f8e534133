"""Analytics engine for the 100K run challenge."""

__version__ = "0.1.0"
