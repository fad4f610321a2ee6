"""
BVQ — Джерело даних

DataSource видає випадкові точки з мітками (з поверненням або без,
за потреби лише заданого класу) та повний набір точок.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Set

import numpy as np

from bvq.core.code_vector import CodeVector
from bvq.core.exceptions import DataSourceError
from bvq.core.label import Label
from bvq.core.point import LabeledPoint


class DataSource(ABC):
    """Інтерфейс джерела навчальних даних"""

    @abstractmethod
    def draw_labeled_point(
        self,
        without_replacement: bool = False,
        label: Optional[Label] = None,
    ) -> LabeledPoint:
        """Випадкова точка (за потреби — лише класу label)"""

    @abstractmethod
    def all_points(self) -> List[LabeledPoint]:
        """Всі точки в початковому порядку"""


class InMemoryDataSource(DataSource):
    """
    Джерело даних у пам'яті.

    Тримає пул для вибірки: без повернення точка видаляється з пулу,
    порожній пул заповнюється заново всіма точками.

    Вибірка за міткою — за індексом позицій кожного класу в пулі
    (без перебору пулу); мітка, якої немає в даних, дає DataSourceError.

    Приклад використання:
        source = InMemoryDataSource(points, seed=42)

        p = source.draw_labeled_point()                 # з поверненням
        q = source.draw_labeled_point(True, minority)   # без повернення, лише minority
    """

    def __init__(self, points: Sequence[LabeledPoint], seed: Optional[int] = None):
        """
        Args:
            points: Точки з мітками
            seed: Seed генератора випадкових чисел
        """
        self._points: List[LabeledPoint] = list(points)
        self._rng = np.random.default_rng(seed)
        self._labels: Set[Label] = {p.label for p in self._points}

        # Пул + індекс: позиції в пулі для кожної мітки та зворотна позиція
        self._pool: List[LabeledPoint] = []
        self._label_positions: Dict[Label, List[int]] = {}
        self._slots: List[int] = []
        self.reset()

    def reset(self) -> None:
        """Заповнити пул усіма точками"""
        self._pool = list(self._points)
        self._label_positions = {}
        self._slots = []
        for position, point in enumerate(self._pool):
            positions = self._label_positions.setdefault(point.label, [])
            self._slots.append(len(positions))
            positions.append(position)

    def _ensure_pool(self) -> None:
        if not self._points:
            raise DataSourceError("Data source contains no points.")
        if not self._pool:
            self.reset()

    def _remove(self, position: int) -> None:
        """Видалити точку з пулу за O(1): обмін з останнім елементом"""
        positions = self._label_positions[self._pool[position].label]
        slot = self._slots[position]
        moved_in_label = positions[-1]
        positions[slot] = moved_in_label
        self._slots[moved_in_label] = slot
        positions.pop()

        last = len(self._pool) - 1
        if position != last:
            moved = self._pool[last]
            moved_slot = self._slots[last]
            self._pool[position] = moved
            self._slots[position] = moved_slot
            self._label_positions[moved.label][moved_slot] = position

        self._pool.pop()
        self._slots.pop()

    def draw_labeled_point(
        self,
        without_replacement: bool = False,
        label: Optional[Label] = None,
    ) -> LabeledPoint:
        """
        Випадкова точка з пулу.

        Args:
            without_replacement: Видалити точку з пулу
            label: Якщо задано — лише точки цього класу

        Returns:
            LabeledPoint
        """
        self._ensure_pool()

        if label is None:
            position = int(self._rng.integers(len(self._pool)))
        else:
            if label not in self._labels:
                raise DataSourceError(f"Cannot find any point labeled '{label}'.")
            if not self._label_positions.get(label):
                # У пулі закінчились точки цього класу
                self.reset()
            candidates = self._label_positions[label]
            position = candidates[int(self._rng.integers(len(candidates)))]

        point = self._pool[position]
        if without_replacement:
            self._remove(position)

        return point

    def all_points(self) -> List[LabeledPoint]:
        return self._points

    def random_code_vectors(self, n: int) -> List[CodeVector]:
        """
        n code vectors з випадкових точок (без урахування розподілу класів).

        Точки беруться без повторення; пул потім скидається.
        """
        code_vectors = [
            CodeVector(self.draw_labeled_point(True).clone()) for _ in range(n)
        ]
        self.reset()
        return code_vectors

    @property
    def labels(self) -> Set[Label]:
        """Мітки, що присутні в даних"""
        return set(self._labels)

    def class_counts(self) -> Dict[Label, int]:
        """Кількість точок кожного класу"""
        counts: Dict[Label, int] = {}
        for p in self._points:
            counts[p.label] = counts.get(p.label, 0) + 1
        return counts

    @property
    def pool_size(self) -> int:
        """Скільки точок лишилось у пулі"""
        return len(self._pool)

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"InMemoryDataSource({len(self._points)} points, {len(self.labels)} labels)"
