"""
BVQ — Точки простору ознак

VectorPoint: вектор ознак фіксованої розмірності (обгортка над numpy).
LabeledPoint: VectorPoint + Label (композиція, не наслідування).

Операції sum/subtract/product змінюють саму точку і повертають її,
щоб можна було накопичувати результат на місці:

    n = a.clone().subtract(b).product(0.5)
"""

from typing import Sequence, Union
import numpy as np

from .exceptions import DimensionMismatchError
from .label import Label


class VectorPoint:
    """
    Вектор ознак фіксованої розмірності.

    Розмірність задається при створенні і більше не змінюється;
    всі бінарні операції вимагають однакової розмірності.
    """

    __slots__ = ("_features",)

    def __init__(self, features: Union[Sequence[float], np.ndarray]):
        """
        Args:
            features: Значення ознак, одновимірні (копіюються у float64)
        """
        self._features = np.array(features, dtype=np.float64)
        if self._features.ndim != 1:
            raise ValueError(
                f"Features must be a 1-D sequence, got array of shape {self._features.shape}."
            )

    # -------------------------------------------------------------------------
    # Властивості
    # -------------------------------------------------------------------------

    @property
    def features(self) -> np.ndarray:
        """Масив ознак shape (D,)"""
        return self._features

    @property
    def dimension(self) -> int:
        """Кількість ознак"""
        return self._features.shape[0]

    def __len__(self) -> int:
        return self.dimension

    def _operand(self, other: "PointLike", operation: str) -> np.ndarray:
        """Отримати ознаки другого операнда з перевіркою розмірності"""
        features = other.features
        if features.shape[0] != self._features.shape[0]:
            raise DimensionMismatchError(
                operation, self._features.shape[0], features.shape[0]
            )
        return features

    # -------------------------------------------------------------------------
    # Операції на місці
    # -------------------------------------------------------------------------

    def sum(self, other: "PointLike") -> "VectorPoint":
        """Поелементна сума (результат зберігається в self)"""
        self._features += self._operand(other, "element-wise sum")
        return self

    def subtract(self, other: "PointLike") -> "VectorPoint":
        """Поелементна різниця (результат зберігається в self)"""
        self._features -= self._operand(other, "element-wise subtraction")
        return self

    def product(self, scalar: float) -> "VectorPoint":
        """Множення на скаляр (результат зберігається в self)"""
        self._features *= scalar
        return self

    def normalize(self, min_max: Union[Sequence[Sequence[float]], np.ndarray]) -> "VectorPoint":
        """
        Min-max нормалізація кожної ознаки в [0, 1].

        Args:
            min_max: Таблиця shape (D, 2): [:, 0] — мінімум, [:, 1] — максимум.
                     Якщо min == max, результат невизначений.
        """
        table = np.asarray(min_max, dtype=np.float64)
        if table.ndim != 2 or table.shape[1] != 2:
            raise DimensionMismatchError(
                "normalization (min-max table columns)",
                2,
                table.shape[1] if table.ndim == 2 else 0,
            )
        if table.shape[0] != self._features.shape[0]:
            raise DimensionMismatchError(
                "normalization", self._features.shape[0], table.shape[0]
            )

        mins = table[:, 0]
        maxs = table[:, 1]
        self._features = (self._features - mins) / (maxs - mins)
        return self

    # -------------------------------------------------------------------------
    # Операції без зміни стану
    # -------------------------------------------------------------------------

    def get_middle_point(self, other: "PointLike") -> "VectorPoint":
        """Нова точка посередині між self та other"""
        middle = self.clone()
        middle.sum(other)
        middle.product(0.5)
        return middle

    def scalar_product(self, other: "PointLike") -> float:
        """Скалярний добуток"""
        return float(np.dot(self._features, self._operand(other, "scalar product")))

    def euclidean_distance(self, other: "PointLike") -> float:
        """Евклідова відстань"""
        diff = self._features - self._operand(other, "euclidean distance")
        return float(np.sqrt(np.dot(diff, diff)))

    def norm(self) -> float:
        """L2 норма"""
        return float(np.sqrt(np.dot(self._features, self._features)))

    def clone(self) -> "VectorPoint":
        """Глибока копія"""
        return VectorPoint(self._features)

    def __repr__(self) -> str:
        return f"VectorPoint({np.array2string(self._features, precision=4)})"


class LabeledPoint:
    """
    Точка з міткою класу.

    Містить власний VectorPoint та посилання на Label.
    Мітку можна змінювати на місці; clone() зберігає мітку.
    """

    __slots__ = ("vector", "label")

    def __init__(self, vector: Union[VectorPoint, Sequence[float], np.ndarray], label: Label):
        """
        Args:
            vector: VectorPoint (використовується як є) або масив ознак
            label: Мітка класу
        """
        if not isinstance(vector, VectorPoint):
            vector = VectorPoint(vector)
        self.vector = vector
        self.label = label

    @property
    def features(self) -> np.ndarray:
        """Масив ознак вкладеного вектора"""
        return self.vector.features

    @property
    def dimension(self) -> int:
        return self.vector.dimension

    def __len__(self) -> int:
        return self.vector.dimension

    def euclidean_distance(self, other: "PointLike") -> float:
        """Евклідова відстань до іншої точки"""
        return self.vector.euclidean_distance(other)

    def clone(self) -> "LabeledPoint":
        """Копія з тією ж міткою"""
        return LabeledPoint(self.vector.clone(), self.label)

    def __repr__(self) -> str:
        return (
            f"LabeledPoint({np.array2string(self.vector.features, precision=4)}, "
            f"label={self.label})"
        )


PointLike = Union[VectorPoint, LabeledPoint]
