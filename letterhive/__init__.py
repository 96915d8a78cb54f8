"""Letter-hive puzzle generation and validation engine."""

__version__ = "1.0.0"
