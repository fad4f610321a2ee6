"""BVQ — Модуль конфігурації"""
from .settings import (
    BVQConfig,
    get_default_config,
    SOMConfig,
    BVQTrainingConfig,
    DataConfig,
    SOMInitialization,
)
from .loader import save_config, load_config, save_yaml, load_yaml

__all__ = [
    "BVQConfig",
    "get_default_config",
    "SOMConfig",
    "BVQTrainingConfig",
    "DataConfig",
    "SOMInitialization",
    "save_config",
    "load_config",
    "save_yaml",
    "load_yaml",
]
