"""Statement classification, metadata readers, SQLite time handling and driver table generation for a SQL client."""

__version__ = "0.1.0"