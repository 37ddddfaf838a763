"""Chat-bot plugin logic: reply rules, SQLite stores, command parsers and message formatters."""

__version__ = "1.3.1"