"""
BVQ — Модуль Self-Organizing Map (SOM)

SOM кожного класу навчається окремо; її прототипи стають
початковими code vectors класифікатора BVQ.

Компоненти:
- SOMGrid: Сітка прототипів n x n (ініціалізація, BMU, навчання)
- SOMQualityValidator: Метрики якості (cohesion, separation, fill rate)

Приклад використання:
    from bvq.core import NumpyPointFactory, BVQClassifier, unify_code_vectors
    from bvq.som import SOMGrid

    factory = NumpyPointFactory(seed=42)

    som_a = SOMGrid.from_data(factory, 25, data_source, label=a)
    som_b = SOMGrid.from_data(factory, 25, data_source, label=b)

    som_a.fit(data_source, a, max_iterations=200000, lr0=0.1, sigma0=0.1)
    som_b.fit(data_source, b, max_iterations=200000, lr0=0.1, sigma0=0.1)

    bvq = BVQClassifier(unify_code_vectors(
        som_a.to_code_vectors(a),
        som_b.to_code_vectors(b),
    ))
"""

from .grid import SOMGrid, grid_side
from .quality import (
    SOMQualityValidator,
    SOMQualityReport,
    SOMQualityThresholds,
    QualityLevel,
    distribution,
    overall_cohesion,
    overall_separation,
)


__all__ = [
    "SOMGrid",
    "grid_side",
    "SOMQualityValidator",
    "SOMQualityReport",
    "SOMQualityThresholds",
    "QualityLevel",
    "distribution",
    "overall_cohesion",
    "overall_separation",
]
