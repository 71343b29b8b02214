"""Track global and environment variable mutations across API test-run script events."""

__version__ = "0.1.0"
