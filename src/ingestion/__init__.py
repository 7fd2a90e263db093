"""
Data Ingestion Module
"""
from .batch_loader import CsvSalesLoader, CsvFileConfig
from .db_loader import DatabaseSalesLoader
from .loaders import InMemorySalesLoader, build_loader

__all__ = [
    "CsvSalesLoader",
    "CsvFileConfig",
    "DatabaseSalesLoader",
    "InMemorySalesLoader",
    "build_loader",
]
