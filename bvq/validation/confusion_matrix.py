"""
BVQ — Матриця помилок

Рядки — справжні класи, колонки — передбачені.
Крім загальних метрик (accuracy, recall, precision, F1), тримає
ковзне вікно останніх результатів (і F1 обраного класу), щоб
відстежувати падіння якості під час навчання.
"""

from collections import deque
from typing import Dict, Iterable, Optional

from bvq.core.label import Label
from bvq.core.point import LabeledPoint


class ConfusionMatrix:
    """
    Матриця помилок класифікації.

    Приклад використання:
        cm = ConfusionMatrix()
        for p in test.all_points():
            cm.add_result(p.label, bvq.predict(p))

        print(f"Accuracy: {cm.accuracy():.2%}")
        print(f"Recall ({minority}): {cm.recall(minority):.2%}")
    """

    def __init__(
        self,
        window: int = 500,
        min_iterations: int = 0,
        best_accuracy_floor: float = 0.55,
        monitored_class: Optional[Label] = None,
    ):
        """
        Args:
            window: Розмір ковзного вікна останніх результатів (і останніх F1)
            min_iterations: Скільки викликів accuracy() чекати перед
                            відстеженням максимуму точності у вікні
            best_accuracy_floor: Початкове значення максимуму точності (і F1) у вікні
            monitored_class: Клас, для якого f1_score() веде ковзне середнє F1
        """
        self.window = window
        self.min_iterations = min_iterations
        self.best_accuracy_floor = best_accuracy_floor

        self._matrix: Dict[Label, Dict[Label, int]] = {}
        self._last_results = deque(maxlen=window)
        self.monitored_class = monitored_class
        self._last_f1_scores = deque(maxlen=window)

        self._best_windowed_accuracy = best_accuracy_floor
        self._last_windowed_accuracy = 0.0
        self._best_windowed_f1 = best_accuracy_floor
        self._last_windowed_f1 = 0.0
        self._iterations = 0

    # -------------------------------------------------------------------------
    # Наповнення
    # -------------------------------------------------------------------------

    def add_result(self, true_label: Label, predicted: Label) -> None:
        """Додати результат класифікації"""
        row = self._matrix.setdefault(true_label, {})
        row[predicted] = row.get(predicted, 0) + 1
        self._last_results.append(1 if predicted == true_label else 0)

    def reset(self) -> None:
        """Очистити матрицю"""
        self._matrix = {}
        self._last_results.clear()
        self._last_f1_scores.clear()

    # -------------------------------------------------------------------------
    # Підрахунки
    # -------------------------------------------------------------------------

    def total_of_label(self, label: Label) -> int:
        """Скільки точок справжнього класу label"""
        return sum(self._matrix.get(label, {}).values())

    def positives_of_label(self, label: Label) -> int:
        """Скільки точок передбачено як label"""
        return sum(row.get(label, 0) for row in self._matrix.values())

    def negatives_of_label(self, label: Label) -> int:
        """Скільки точок справжніх класів, відмінних від label"""
        return sum(
            sum(row.values()) for true_label, row in self._matrix.items() if true_label != label
        )

    def true_positives_of_label(self, label: Label) -> int:
        return self._matrix.get(label, {}).get(label, 0)

    def count_predictions(self) -> int:
        """Загальна кількість результатів"""
        return sum(sum(row.values()) for row in self._matrix.values())

    # -------------------------------------------------------------------------
    # Метрики
    # -------------------------------------------------------------------------

    def _overall_accuracy(self) -> float:
        total = self.count_predictions()
        if total == 0:
            return 0.0
        correct = sum(row.get(label, 0) for label, row in self._matrix.items())
        return correct / total

    def _f1(self, label: Label) -> float:
        recall = self.recall(label)
        precision = self.precision(label)
        if recall + precision <= 0:
            return 0.0
        return 2 * recall * precision / (recall + precision)

    def accuracy(self) -> float:
        """
        Загальна точність (діагональ / всі результати).

        Також оновлює статистику ковзного вікна.
        """
        if self.count_predictions() == 0:
            return 0.0

        self._last_windowed_accuracy = self.windowed_accuracy()
        if self._iterations < self.min_iterations:
            self._iterations += 1
        if (
            self._iterations >= self.min_iterations
            and self._last_windowed_accuracy > self._best_windowed_accuracy
        ):
            self._best_windowed_accuracy = self._last_windowed_accuracy

        return self._overall_accuracy()

    def recall(self, label: Label) -> float:
        total = self.total_of_label(label)
        if total <= 0:
            return 0.0
        return self.true_positives_of_label(label) / total

    def precision(self, label: Label) -> float:
        positives = self.positives_of_label(label)
        if positives <= 0:
            return 0.0
        return self.true_positives_of_label(label) / positives

    def f1_score(self, label: Label) -> float:
        """
        Гармонічне середнє recall та precision.

        Для monitored_class також додає значення у ковзне вікно F1
        та оновлює його максимум.
        """
        score = self._f1(label)

        if self.monitored_class is not None and label == self.monitored_class:
            self._last_f1_scores.append(score)
            self._last_windowed_f1 = self.windowed_f1_score()
            if (
                self._iterations >= self.min_iterations
                and self._last_windowed_f1 > self._best_windowed_f1
            ):
                self._best_windowed_f1 = self._last_windowed_f1

        return score

    def windowed_accuracy(self) -> float:
        """Точність на останніх window результатах"""
        if not self._last_results:
            return 0.0
        return sum(self._last_results) / len(self._last_results)

    def accuracy_variation(self) -> float:
        """Падіння точності у вікні відносно найкращої, що спостерігалась"""
        drop = self._best_windowed_accuracy - self._last_windowed_accuracy
        if drop > 0 and self._iterations >= self.min_iterations:
            return drop
        return 0.0

    def windowed_f1_score(self) -> float:
        """Середнє останніх window значень F1 для monitored_class"""
        if not self._last_f1_scores:
            return 0.0
        return sum(self._last_f1_scores) / len(self._last_f1_scores)

    def f1_score_variation(self) -> float:
        """Падіння середнього F1 у вікні відносно найкращого, що спостерігалось"""
        drop = self._best_windowed_f1 - self._last_windowed_f1
        if drop > 0 and self._iterations >= self.min_iterations:
            return drop
        return 0.0

    def reset_variation(self) -> None:
        self._best_windowed_accuracy = self.best_accuracy_floor
        self._best_windowed_f1 = self.best_accuracy_floor
        self._iterations = 0

    @property
    def labels(self):
        """Всі мітки, що зустрічались (справжні або передбачені)"""
        seen = set(self._matrix)
        for row in self._matrix.values():
            seen.update(row)
        return seen

    def to_dict(self) -> dict:
        """Серіалізація (не змінює статистику ковзних вікон)"""
        labels = sorted(self.labels, key=lambda label: label.name)
        return {
            "matrix": {
                t.name: {p.name: self._matrix.get(t, {}).get(p, 0) for p in labels}
                for t in labels
            },
            "total": self.count_predictions(),
            "accuracy": self._overall_accuracy(),
            "per_class": {
                label.name: {
                    "recall": self.recall(label),
                    "precision": self.precision(label),
                    "f1": self._f1(label),
                }
                for label in labels
            },
        }

    def __repr__(self) -> str:
        return f"ConfusionMatrix({self.count_predictions()} predictions, {len(self.labels)} labels)"


def evaluate_classifier(
    classifier,
    points: Iterable[LabeledPoint],
    matrix: Optional[ConfusionMatrix] = None,
) -> ConfusionMatrix:
    """
    Класифікувати точки та зібрати матрицю помилок.

    Args:
        classifier: Об'єкт з методом predict(point) → Label
        points: Точки з відомими мітками
        matrix: Існуюча матриця для доповнення (за замовчуванням нова)

    Returns:
        ConfusionMatrix
    """
    if matrix is None:
        matrix = ConfusionMatrix()
    for point in points:
        matrix.add_result(point.label, classifier.predict(point))
    return matrix
