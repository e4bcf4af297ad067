"""Check-in scoring and question progress engine for coaching clients."""

__version__ = "0.1.0"
