"""Partition transforms, table scan planning and transactions for Iceberg-style tables."""

__version__ = "0.1.0"