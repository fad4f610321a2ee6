"""
BVQ — Налаштування системи

Всі параметри системи зібрані в dataclass-и для:
- Типізації та валідації
- Легкого доступу через config.som.n_clusters
- Серіалізації в YAML
"""

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from bvq.core.label import Label


# =============================================================================
# ENUMS
# =============================================================================

class SOMInitialization(str, Enum):
    """Метод ініціалізації SOM"""
    DATA = "data"
    RANDOM = "random"


# =============================================================================
# SOM CONFIGURATION
# =============================================================================

@dataclass
class SOMConfig:
    """Параметри Self-Organizing Map (одна SOM на клас)"""

    # Топологія (повний квадрат: 25 → 5x5)
    n_clusters: int = 25

    # Навчання
    max_iterations: int = 200_000
    learning_rate_init: float = 0.1
    sigma_init: float = 0.1
    alpha: Optional[float] = None  # None → max_iterations
    beta: Optional[float] = None   # None → max_iterations

    initialization: SOMInitialization = SOMInitialization.DATA

    @classmethod
    def for_class_size(cls, n_points: int, **kwargs) -> "SOMConfig":
        """Створити конфігурацію з кількістю кластерів ~ sqrt(n_points), округленою до повного квадрата"""
        side = max(1, round(math.sqrt(math.sqrt(max(n_points, 1)))))
        return cls(n_clusters=side * side, **kwargs)


# =============================================================================
# BVQ CONFIGURATION
# =============================================================================

@dataclass
class BVQTrainingConfig:
    """Параметри навчання BVQ"""
    learning_rate_init: float = 0.1
    max_iterations: int = 2_000_000
    delta: float = 0.2  # поріг відстані точки до межі рішення


# =============================================================================
# DATA CONFIGURATION
# =============================================================================

@dataclass
class DataConfig:
    """Параметри завантаження даних"""
    separator: str = ";"
    label_column: int = -1
    skip_header: bool = True
    test_ratio: float = 0.2
    normalize: bool = True


# =============================================================================
# MAIN CONFIGURATION
# =============================================================================

@dataclass
class BVQConfig:
    """
    Головна конфігурація BVQ

    Об'єднує всі параметри системи в одному місці.

    Приклад використання:
        config = BVQConfig(risks={"1": {"2": 1.0}, "2": {"1": 0.3}})
        labels = config.labels()
        print(config.som.n_clusters)  # 25
        print(config.bvq.delta)  # 0.2
    """

    # Метадані
    version: str = "1.0.0"
    project_name: str = "BVQ"
    random_seed: Optional[int] = 42

    # Ризики помилкової класифікації {клас: {інший клас: ризик}}
    risks: Dict[str, Dict[str, float]] = field(default_factory=dict)

    # Компоненти
    som: SOMConfig = field(default_factory=SOMConfig)
    bvq: BVQTrainingConfig = field(default_factory=BVQTrainingConfig)
    data: DataConfig = field(default_factory=DataConfig)

    def labels(self) -> List[Label]:
        """Створити мітки з таблицею ризиків"""
        names = list(self.risks)
        for table in self.risks.values():
            names.extend(n for n in table if n not in names)

        labels = {name: Label(name) for name in names}
        for name, table in self.risks.items():
            for other, risk in table.items():
                labels[name].assign_misclassification_cost(labels[other], risk)

        return list(labels.values())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BVQConfig":
        """Відновити конфігурацію зі словника (напр. з YAML)"""
        data = dict(data)
        som = dict(data.pop("som", None) or {})
        bvq = dict(data.pop("bvq", None) or {})
        data_config = dict(data.pop("data", None) or {})

        if "initialization" in som:
            som["initialization"] = SOMInitialization(som["initialization"])

        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        return cls(
            som=SOMConfig(**som),
            bvq=BVQTrainingConfig(**bvq),
            data=DataConfig(**data_config),
            **data,
        )


# =============================================================================
# DEFAULT CONFIG INSTANCE
# =============================================================================

def get_default_config() -> BVQConfig:
    """Отримати конфігурацію за замовчуванням (два класи "1" та "2")"""
    return BVQConfig(risks={"1": {"2": 1.0}, "2": {"1": 1.0}})
