"""
BVQ — Завантаження датасету з CSV

Кожен рядок: ознаки + мітка класу в колонці label_column.
Мітки мають бути відомі заздалегідь (разом з їх таблицями ризиків);
рядки з невідомими мітками пропускаються.

Формат:
    x1;x2;class
    0.5;1.2;"1"
    0.7;0.3;"2"
"""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from bvq.core.factory import NumpyPointFactory, PointFactory
from bvq.core.label import Label
from bvq.core.point import LabeledPoint
from .source import InMemoryDataSource


def compute_min_max(points: Iterable[LabeledPoint]) -> np.ndarray:
    """
    Мінімум і максимум кожної ознаки.

    Returns:
        Масив shape (D, 2): [:, 0] — мінімум, [:, 1] — максимум
    """
    matrix = np.array([p.features for p in points], dtype=np.float64)
    if matrix.size == 0:
        raise ValueError("Cannot compute min/max of an empty point set.")
    return np.stack([matrix.min(axis=0), matrix.max(axis=0)], axis=1)


class CSVDatasetLoader:
    """
    Завантажувач датасету з CSV файлу.

    Приклад використання:
        one, two = Label("1"), Label("2")
        loader = CSVDatasetLoader("data/test.csv", labels=[one, two], label_column=2, skip_header=True)
        loader.load()
        loader.normalize()

        train, test = loader.split(test_ratio=0.2, seed=42)
    """

    def __init__(
        self,
        path: str,
        labels: Iterable[Label],
        factory: Optional[PointFactory] = None,
        separator: str = ";",
        label_column: int = -1,
        skip_header: bool = False,
    ):
        """
        Args:
            path: Шлях до CSV
            labels: Відомі мітки класів
            factory: Фабрика точок (за замовчуванням NumpyPointFactory)
            separator: Роздільник колонок
            label_column: Індекс колонки з міткою (від'ємний — з кінця)
            skip_header: Пропустити перший рядок
        """
        self.path = Path(path)
        self.factory = factory if factory is not None else NumpyPointFactory()
        self.separator = separator
        self.label_column = label_column
        self.skip_header = skip_header

        self._labels: Dict[str, Label] = {label.name: label for label in labels}
        self._points: List[LabeledPoint] = []
        self._min_max: Optional[np.ndarray] = None
        self.skipped_rows: int = 0

    def get_label(self, name: str) -> Optional[Label]:
        """Мітка за назвою (лапки ігноруються)"""
        return self._labels.get(name.strip().replace('"', ""))

    def add_label(self, label: Label) -> None:
        self._labels[label.name] = label

    def load(self, verbose: bool = False) -> List[LabeledPoint]:
        """
        Прочитати файл.

        Returns:
            Список точок з мітками
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Dataset file not found: {self.path}")
        if not self._labels:
            raise ValueError("Labels must be set before loading the dataset.")

        if verbose:
            print(f"Loading data from {self.path}...")

        self._points = []
        self.skipped_rows = 0

        with open(self.path, "r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f, delimiter=self.separator, quotechar='"')

            if self.skip_header:
                next(reader, None)

            for row in reader:
                # Порожні колонки від роздільника в кінці рядка
                while row and row[-1].strip() == "":
                    row.pop()
                if not row:
                    continue

                label_index = self.label_column % len(row)
                label = self.get_label(row[label_index])
                if label is None:
                    self.skipped_rows += 1
                    continue

                features = self.factory.new_feature_array(len(row) - 1)
                k = 0
                for i, cell in enumerate(row):
                    if i == label_index:
                        continue
                    features[k] = float(cell)
                    k += 1

                self._points.append(self.factory.new_labeled_point(features, label))

        self._min_max = compute_min_max(self._points) if self._points else None

        if verbose:
            print(f"  Points: {len(self._points)}")
            print(f"  Features: {self.n_features}")
            if self.skipped_rows:
                print(f"  Skipped rows (unknown label): {self.skipped_rows}")

        return self._points

    @property
    def points(self) -> List[LabeledPoint]:
        return self._points

    @property
    def n_features(self) -> int:
        """Кількість ознак"""
        if not self._points:
            raise RuntimeError("No data loaded. Call load() first.")
        return self._points[0].dimension

    @property
    def min_max(self) -> Optional[np.ndarray]:
        """Таблиця min/max ознак shape (D, 2)"""
        return self._min_max

    def normalize(self) -> None:
        """Min-max нормалізація всіх точок на місці"""
        if self._min_max is None:
            raise RuntimeError("No data loaded. Call load() first.")
        for point in self._points:
            point.vector.normalize(self._min_max)

    def to_data_source(self, seed: Optional[int] = None) -> InMemoryDataSource:
        """Всі точки як InMemoryDataSource"""
        return InMemoryDataSource(self._points, seed=seed)

    def split(
        self,
        test_ratio: float,
        seed: Optional[int] = None,
    ) -> Tuple[InMemoryDataSource, InMemoryDataSource]:
        """
        Випадковий поділ на train/test.

        Args:
            test_ratio: Частка тестових точок, (0, 1)
            seed: Seed для відтворюваності

        Returns:
            (train, test)
        """
        if not 0.0 < test_ratio < 1.0:
            raise ValueError("test_ratio must be in (0, 1).")
        if not self._points:
            raise RuntimeError("No data loaded. Call load() first.")

        rng = np.random.default_rng(seed)
        n_test = int(round(len(self._points) * test_ratio))
        test_indices = set(rng.choice(len(self._points), size=n_test, replace=False).tolist())

        train_points = [p for i, p in enumerate(self._points) if i not in test_indices]
        test_points = [p for i, p in enumerate(self._points) if i in test_indices]

        return (
            InMemoryDataSource(train_points, seed=seed),
            InMemoryDataSource(test_points, seed=seed),
        )

    def __repr__(self) -> str:
        return f"CSVDatasetLoader({self.path.name}, {len(self._points)} points)"
