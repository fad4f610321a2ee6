"""BVQ — Завантаження конфігурації"""
import yaml
from enum import Enum
from pathlib import Path
from dataclasses import asdict
from .settings import BVQConfig


def _plain(value):
    """Enum → значення, tuple → list (для yaml.safe_load)"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def save_yaml(config: BVQConfig, path: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(_plain(asdict(config)), f, default_flow_style=False, allow_unicode=True)


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def save_config(config: BVQConfig, path: str) -> None:
    save_yaml(config, path)


def load_config(path: str) -> BVQConfig:
    return BVQConfig.from_dict(load_yaml(path))
