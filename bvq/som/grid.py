"""
BVQ — Self-Organizing Map

Квадратна сітка n x n прототипів. Використовується для ініціалізації
code vectors BVQ: окрема SOM навчається на точках кожного класу,
після чого її прототипи стають code vectors цього класу.

Для подібності використовується евклідова відстань.
"""

import math
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from bvq.config.settings import SOMInitialization
from bvq.core.code_vector import CodeVector
from bvq.core.exceptions import GridSizeError, SOMError
from bvq.core.factory import PointFactory
from bvq.core.label import Label
from bvq.core.point import PointLike, VectorPoint


def grid_side(n_clusters: int) -> int:
    """Сторона сітки n, де n * n == n_clusters"""
    if n_clusters < 1:
        raise GridSizeError(n_clusters)
    n = math.isqrt(n_clusters)
    if n * n != n_clusters:
        raise GridSizeError(n_clusters)
    return n


def _decay(value0: float, t: int, constant: float) -> float:
    """value0 · exp(-t / constant); при constant == 0 спадає до 0 одразу після кроку 0"""
    if t == 0:
        return value0
    if constant == 0:
        return 0.0
    return value0 * math.exp(-t / constant)


class SOMGrid:
    """
    Self-Organizing Map на квадратній сітці.

    Приклад використання:
        factory = NumpyPointFactory(seed=42)

        # Ініціалізація точками класу
        som = SOMGrid.from_data(factory, 25, data_source, label=minority)
        som.fit(data_source, minority, max_iterations=200000, lr0=0.1, sigma0=0.1)

        code_vectors = som.to_code_vectors(minority)
    """

    def __init__(
        self,
        factory: PointFactory,
        prototypes: List[List[VectorPoint]],
        verbose: bool = False,
    ):
        """
        Args:
            factory: Фабрика точок
            prototypes: Матриця прототипів n x n
            verbose: Виводити прогрес навчання
        """
        self.factory = factory
        self._prototypes = prototypes
        self._n = len(prototypes)

        if self._n == 0 or any(len(row) != self._n for row in prototypes):
            raise SOMError("Prototype matrix must be square and non-empty.")

        self.verbose = verbose

    # -------------------------------------------------------------------------
    # Створення
    # -------------------------------------------------------------------------

    @classmethod
    def random(
        cls,
        factory: PointFactory,
        n_clusters: int,
        n_features: int,
        verbose: bool = False,
    ) -> "SOMGrid":
        """
        Ініціалізація випадковими значеннями.

        Args:
            factory: Фабрика точок (джерело випадкових значень)
            n_clusters: Кількість кластерів (повний квадрат)
            n_features: Кількість ознак
        """
        n = grid_side(n_clusters)

        prototypes = factory.new_point_matrix(n, n)
        for i in range(n):
            for j in range(n):
                features = factory.new_feature_array(n_features)
                for k in range(n_features):
                    features[k] = factory.random_feature_value()
                prototypes[i][j] = factory.new_point(features)

        return cls(factory, prototypes, verbose=verbose)

    @classmethod
    def from_data(
        cls,
        factory: PointFactory,
        n_clusters: int,
        data_source,
        label: Optional[Label] = None,
        verbose: bool = False,
    ) -> "SOMGrid":
        """
        Ініціалізація копіями випадкових точок з даних.

        Args:
            factory: Фабрика точок
            n_clusters: Кількість кластерів (повний квадрат)
            data_source: DataSource
            label: Якщо задано — лише точки цього класу
        """
        n = grid_side(n_clusters)

        prototypes = factory.new_point_matrix(n, n)
        for i in range(n):
            for j in range(n):
                point = data_source.draw_labeled_point(False, label)
                prototypes[i][j] = factory.new_point(point.features)

        return cls(factory, prototypes, verbose=verbose)

    @classmethod
    def from_config(
        cls,
        factory: PointFactory,
        config,
        data_source,
        label: Optional[Label] = None,
        verbose: bool = False,
    ) -> "SOMGrid":
        """Створити SOM за SOMConfig"""
        if config.initialization == SOMInitialization.RANDOM:
            n_features = data_source.all_points()[0].dimension
            grid = cls.random(factory, config.n_clusters, n_features, verbose=verbose)
        else:
            grid = cls.from_data(factory, config.n_clusters, data_source, label, verbose=verbose)
        return grid

    # -------------------------------------------------------------------------
    # Властивості
    # -------------------------------------------------------------------------

    @property
    def n(self) -> int:
        """Сторона сітки"""
        return self._n

    @property
    def n_clusters(self) -> int:
        return self._n * self._n

    @property
    def grid_shape(self) -> Tuple[int, int]:
        return (self._n, self._n)

    @property
    def prototypes(self) -> List[List[VectorPoint]]:
        """Матриця прототипів n x n"""
        return self._prototypes

    def get_weights(self) -> np.ndarray:
        """Ваги у вигляді масиву shape (n, n, D)"""
        return np.array(
            [[self._prototypes[i][j].features for j in range(self._n)] for i in range(self._n)]
        )

    # -------------------------------------------------------------------------
    # Пошук та навчання
    # -------------------------------------------------------------------------

    def best_matching_unit(self, point: PointLike) -> Tuple[int, int]:
        """
        Знайти найближчий прототип (BMU).

        При рівних відстанях перемагає перший у порядку рядків.

        Returns:
            Координати BMU (row, col)
        """
        bmu = (0, 0)
        min_distance = float("inf")

        for i in range(self._n):
            for j in range(self._n):
                distance = self._prototypes[i][j].euclidean_distance(point)
                if distance < min_distance:
                    min_distance = distance
                    bmu = (i, j)

        return bmu

    def _neighborhood(self, bmu: Tuple[int, int], sigma: float) -> np.ndarray:
        """Гаусові ваги сусідства shape (n, n); при sigma == 0 — лише BMU"""
        if sigma == 0.0:
            weights = np.zeros((self._n, self._n))
            weights[bmu] = 1.0
            return weights

        rows, cols = np.indices((self._n, self._n))
        squared = (rows - bmu[0]) ** 2 + (cols - bmu[1]) ** 2
        return np.exp(-squared / (2.0 * sigma * sigma))

    def fit(
        self,
        data_source,
        label: Optional[Label],
        max_iterations: int,
        lr0: float,
        sigma0: float,
        alpha: Optional[float] = None,
        beta: Optional[float] = None,
    ) -> None:
        """
        Навчити прототипи на даних.

        Args:
            data_source: DataSource
            label: Якщо задано — лише точки цього класу
            max_iterations: Кількість ітерацій
            lr0: Learning rate на кроці 0
            sigma0: Радіус сусідства на кроці 0
            alpha: Стала спаду learning rate (за замовчуванням max_iterations)
            beta: Стала спаду радіусу (за замовчуванням max_iterations)
        """
        if alpha is None:
            alpha = max_iterations
        if beta is None:
            beta = max_iterations
        if alpha < 0 or beta < 0:
            raise SOMError(f"Decay constants must be non-negative, got alpha={alpha}, beta={beta}.")

        if self.verbose:
            print(f"Training SOM {self._n}x{self._n}" + (f" for class {label}" if label else "") + "...")
            print(f"  Iterations: {max_iterations}")
            print(f"  lr0: {lr0}, sigma0: {sigma0}")

        for t in tqdm(range(max_iterations), disable=not self.verbose):
            lr = _decay(lr0, t, alpha)
            sigma = _decay(sigma0, t, beta)

            point = data_source.draw_labeled_point(False, label)

            bmu = self.best_matching_unit(point)
            weights = self._neighborhood(bmu, sigma)

            for i in range(self._n):
                for j in range(self._n):
                    weight = weights[i, j]
                    if weight == 0.0:
                        continue

                    prototype = self._prototypes[i][j]
                    step = VectorPoint(point.features).subtract(prototype)
                    step.product(lr * weight)
                    prototype.sum(step)

    def fit_with_config(self, data_source, label: Optional[Label], config) -> None:
        """Навчити з параметрами SOMConfig"""
        self.fit(
            data_source,
            label,
            max_iterations=config.max_iterations,
            lr0=config.learning_rate_init,
            sigma0=config.sigma_init,
            alpha=config.alpha,
            beta=config.beta,
        )

    def to_code_vectors(self, label: Label) -> List[CodeVector]:
        """
        Прототипи як code vectors з міткою label (порядок рядків).

        Прототипи копіюються: подальше навчання BVQ не змінює SOM.
        """
        return [
            CodeVector(self.factory.with_label(self._prototypes[i][j], label))
            for i in range(self._n)
            for j in range(self._n)
        ]

    def __repr__(self) -> str:
        return f"SOMGrid({self._n}x{self._n})"
