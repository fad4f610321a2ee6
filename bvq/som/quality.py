"""
BVQ — Метрики якості SOM

Метрики:
- Distribution — кількість точок, що потрапили в кожен юніт
- Cohesion — сума відстаней точок до їх BMU
- Separation — сума попарних відстаней між прототипами
- QE (Quantization Error) — середня відстань до BMU
- Fill Rate — частка юнітів, у які потрапила хоч одна точка
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from bvq.core.exceptions import SOMError
from bvq.core.point import PointLike
from .grid import SOMGrid


class QualityLevel(Enum):
    """Рівень якості"""
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"


def distribution(grid: SOMGrid, points: Sequence[PointLike]) -> np.ndarray:
    """
    Розподіл точок по юнітах.

    Returns:
        Матриця кількостей shape (n, n)
    """
    counts = np.zeros(grid.grid_shape, dtype=np.int64)
    for point in points:
        counts[grid.best_matching_unit(point)] += 1
    return counts


def overall_cohesion(grid: SOMGrid, points: Sequence[PointLike]) -> float:
    """Сума відстаней кожної точки до прототипу її BMU"""
    cohesion = 0.0
    for point in points:
        i, j = grid.best_matching_unit(point)
        cohesion += grid.prototypes[i][j].euclidean_distance(point)
    return cohesion


def overall_separation(grid: SOMGrid) -> float:
    """Сума відстаней між усіма впорядкованими парами різних прототипів"""
    weights = grid.get_weights().reshape(grid.n_clusters, -1)
    diff = weights[:, None, :] - weights[None, :, :]
    # Діагональ (прототип сам з собою) дає 0
    return float(np.linalg.norm(diff, axis=2).sum())


@dataclass
class SOMQualityThresholds:
    """Пороги якості SOM"""
    # Quantization Error (для нормалізованих у [0, 1] ознак)
    qe_excellent: float = 0.05
    qe_good: float = 0.1
    qe_acceptable: float = 0.2

    # Fill Rate
    fill_min: float = 0.6
    fill_max: float = 1.0


@dataclass
class SOMQualityReport:
    """Звіт про якість SOM"""
    cohesion: float
    separation: float
    quantization_error: float
    fill_rate: float

    qe_level: QualityLevel
    fill_level: QualityLevel
    overall_level: QualityLevel

    total_units: int
    active_units: int
    empty_units: int

    points_per_unit_mean: float
    points_per_unit_max: int

    grid_size: Tuple[int, int] = (0, 0)
    total_points: int = 0

    def is_acceptable(self) -> bool:
        """Чи прийнятна якість"""
        return self.overall_level != QualityLevel.POOR

    def to_dict(self) -> dict:
        """Серіалізація"""
        return {
            "cohesion": self.cohesion,
            "separation": self.separation,
            "quantization_error": self.quantization_error,
            "fill_rate": self.fill_rate,
            "qe_level": self.qe_level.value,
            "fill_level": self.fill_level.value,
            "overall_level": self.overall_level.value,
            "total_units": self.total_units,
            "active_units": self.active_units,
            "empty_units": self.empty_units,
            "points_per_unit": {
                "mean": self.points_per_unit_mean,
                "max": self.points_per_unit_max,
            },
            "grid_size": self.grid_size,
            "total_points": self.total_points,
            "is_acceptable": self.is_acceptable(),
        }

    def __repr__(self) -> str:
        return (
            f"SOMQualityReport(\n"
            f"  QE={self.quantization_error:.4f} ({self.qe_level.value})\n"
            f"  Fill={self.fill_rate:.2%} ({self.fill_level.value})\n"
            f"  Cohesion={self.cohesion:.4f}, Separation={self.separation:.4f}\n"
            f"  Overall: {self.overall_level.value}\n"
            f"  Units: {self.active_units}/{self.total_units} active\n"
            f")"
        )


class SOMQualityValidator:
    """
    Валідатор якості SOM.

    Приклад використання:
        validator = SOMQualityValidator()
        report = validator.validate(som, data_source.all_points())

        if not report.is_acceptable():
            print(f"Проблеми: QE={report.qe_level}, Fill={report.fill_level}")
    """

    def __init__(self, thresholds: Optional[SOMQualityThresholds] = None):
        self.thresholds = thresholds or SOMQualityThresholds()

    def validate(self, grid: SOMGrid, points: Sequence[PointLike]) -> SOMQualityReport:
        """
        Повна валідація SOM.

        Args:
            grid: Навчена SOM
            points: Точки для оцінки

        Returns:
            SOMQualityReport
        """
        if not points:
            raise SOMError("Cannot validate SOM on an empty point set.")

        counts = distribution(grid, points)
        cohesion = overall_cohesion(grid, points)
        separation = overall_separation(grid)

        total_units = grid.n_clusters
        active_units = int(np.count_nonzero(counts))
        fill_rate = active_units / total_units

        qe = cohesion / len(points)
        active_counts = counts[counts > 0]

        qe_level = self._classify_qe(qe)
        fill_level = self._classify_fill(fill_rate)

        return SOMQualityReport(
            cohesion=cohesion,
            separation=separation,
            quantization_error=qe,
            fill_rate=fill_rate,
            qe_level=qe_level,
            fill_level=fill_level,
            overall_level=self._compute_overall(qe_level, fill_level),
            total_units=total_units,
            active_units=active_units,
            empty_units=total_units - active_units,
            points_per_unit_mean=float(active_counts.mean()),
            points_per_unit_max=int(active_counts.max()),
            grid_size=grid.grid_shape,
            total_points=len(points),
        )

    def _classify_qe(self, qe: float) -> QualityLevel:
        """Класифікація QE"""
        if qe <= self.thresholds.qe_excellent:
            return QualityLevel.EXCELLENT
        elif qe <= self.thresholds.qe_good:
            return QualityLevel.GOOD
        elif qe <= self.thresholds.qe_acceptable:
            return QualityLevel.ACCEPTABLE
        else:
            return QualityLevel.POOR

    def _classify_fill(self, fill_rate: float) -> QualityLevel:
        """Класифікація Fill Rate"""
        if self.thresholds.fill_min <= fill_rate <= self.thresholds.fill_max:
            if fill_rate >= 0.8:
                return QualityLevel.EXCELLENT
            return QualityLevel.GOOD
        elif fill_rate >= self.thresholds.fill_min * 0.8:
            return QualityLevel.ACCEPTABLE
        else:
            return QualityLevel.POOR

    def _compute_overall(self, qe_level: QualityLevel, fill_level: QualityLevel) -> QualityLevel:
        """Загальний рівень — гірший з двох"""
        order = [
            QualityLevel.EXCELLENT,
            QualityLevel.GOOD,
            QualityLevel.ACCEPTABLE,
            QualityLevel.POOR,
        ]
        return max(qe_level, fill_level, key=order.index)
