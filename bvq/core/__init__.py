"""
BVQ — Ядро алгоритму

Компоненти:
- Label: Мітка класу з таблицею ризиків
- VectorPoint, LabeledPoint: Точки простору ознак
- PointFactory, NumpyPointFactory: Створення точок
- CodeVector: Прототип з правилом оновлення
- BVQClassifier: Класифікатор (навчання, передбачення)

Приклад використання:
    from bvq.core import BVQClassifier, CodeVector, Label, LabeledPoint

    a, b = Label("A"), Label("B")
    bvq = BVQClassifier([
        CodeVector(LabeledPoint([0.0], a)),
        CodeVector(LabeledPoint([10.0], b)),
    ])

    bvq.train(LabeledPoint([4.0], a), lr0=0.1, iteration=0, delta=3.0)
    print(bvq.predict(LabeledPoint([1.0], a)))  # A
"""

from .label import Label, DEFAULT_RISK
from .point import VectorPoint, LabeledPoint, PointLike
from .factory import PointFactory, NumpyPointFactory
from .code_vector import CodeVector
from .classifier import BVQClassifier, default_learning_rate, unify_code_vectors
from .exceptions import (
    BVQError,
    DimensionMismatchError,
    InsufficientCodeVectorsError,
    MissingValueError,
    NotReadyError,
    QuotasNotConfiguredError,
    UnknownLabelError,
    SOMError,
    GridSizeError,
    DataSourceError,
)


__all__ = [
    "Label",
    "DEFAULT_RISK",
    "VectorPoint",
    "LabeledPoint",
    "PointLike",
    "PointFactory",
    "NumpyPointFactory",
    "CodeVector",
    "BVQClassifier",
    "default_learning_rate",
    "unify_code_vectors",
    # Винятки
    "BVQError",
    "DimensionMismatchError",
    "InsufficientCodeVectorsError",
    "MissingValueError",
    "NotReadyError",
    "QuotasNotConfiguredError",
    "UnknownLabelError",
    "SOMError",
    "GridSizeError",
    "DataSourceError",
]
