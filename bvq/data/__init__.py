"""BVQ — Модуль даних"""
from .source import DataSource, InMemoryDataSource
from .loader import CSVDatasetLoader, compute_min_max

__all__ = [
    "DataSource",
    "InMemoryDataSource",
    "CSVDatasetLoader",
    "compute_min_max",
]
