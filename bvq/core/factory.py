"""
BVQ — Фабрика точок

Ядро (SOM, CodeVector, BVQClassifier) не створює точки напряму,
а отримує фабрику. Так алгоритм не залежить від конкретного
представлення ознак.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
import numpy as np

from .label import Label
from .point import LabeledPoint, PointLike, VectorPoint


class PointFactory(ABC):
    """Інтерфейс фабрики точок"""

    @abstractmethod
    def new_feature_array(self, n: int) -> np.ndarray:
        """Масив ознак довжини n"""

    @abstractmethod
    def new_point(self, features: Sequence[float]) -> VectorPoint:
        """Точка з масиву ознак"""

    @abstractmethod
    def new_labeled_point(self, features: Sequence[float], label: Label) -> LabeledPoint:
        """Точка з міткою з масиву ознак"""

    @abstractmethod
    def random_feature_value(self) -> float:
        """Випадкове значення однієї ознаки"""

    def new_point_matrix(self, n: int, m: int) -> List[List[Optional[VectorPoint]]]:
        """Порожня матриця точок n x m"""
        return [[None] * m for _ in range(n)]

    def new_labeled_point_matrix(self, n: int, m: int) -> List[List[Optional[LabeledPoint]]]:
        """Порожня матриця точок з мітками n x m"""
        return [[None] * m for _ in range(n)]

    def with_label(self, point: PointLike, label: Label) -> LabeledPoint:
        """Копія точки з новою міткою"""
        return self.new_labeled_point(point.features, label)


class NumpyPointFactory(PointFactory):
    """
    Фабрика точок на основі numpy (float64).

    Випадкові значення — рівномірні в [0, 1), як і нормалізовані ознаки.

    Приклад використання:
        factory = NumpyPointFactory(seed=42)
        p = factory.new_point([0.1, 0.2])
        lp = factory.with_label(p, Label("A"))
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Seed генератора випадкових чисел
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def new_feature_array(self, n: int) -> np.ndarray:
        return np.zeros(n, dtype=np.float64)

    def new_point(self, features: Sequence[float]) -> VectorPoint:
        return VectorPoint(features)

    def new_labeled_point(self, features: Sequence[float], label: Label) -> LabeledPoint:
        return LabeledPoint(VectorPoint(features), label)

    def random_feature_value(self) -> float:
        return float(self._rng.random())

    def __repr__(self) -> str:
        return f"NumpyPointFactory(seed={self.seed})"
