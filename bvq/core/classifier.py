"""
BVQ — Класифікатор Bayes Vector Quantizer

Тримає набір code vectors і реалізує:
- пошук двох найближчих code vectors
- крок навчання та цикл навчання (SGD зі спадним learning rate)
- передбачення (1-NN)
- ліниве заповнення code vectors за квотами для кожного класу

Набір code vectors — незмінний tuple (copy-on-write): кожне успішне
add_code_vector публікує новий знімок, тому читачі (predict,
nearest_two) ітерують повний знімок без блокувань.
"""

import threading
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from tqdm import tqdm

from .code_vector import CodeVector
from .exceptions import (
    InsufficientCodeVectorsError,
    MissingValueError,
    NotReadyError,
    QuotasNotConfiguredError,
    UnknownLabelError,
)
from .label import Label
from .point import LabeledPoint, PointLike


LearningRateFunction = Callable[[float, int], float]


def default_learning_rate(lr0: float, iteration: int) -> float:
    """Learning rate з оригінальної статті: lr0 · i^(-0.51)"""
    return lr0 * (1.0 if iteration == 0 else iteration ** -0.51)


class BVQClassifier:
    """
    Bayes Vector Quantizer.

    Стани:
        Unseeded — є класи з ненульовою квотою
        Ready    — всі квоти 0 (або класифікатор створено з готових code vectors)

    Навчання та передбачення можливі лише в стані Ready.

    Приклад використання:
        bvq = BVQClassifier(code_vectors)
        bvq.fit(data_source, lr0=0.1, max_iterations=100000, delta=0.2)
        label = bvq.predict(point)

        # Ліниве заповнення
        bvq = BVQClassifier.with_quotas({label_a: 2, label_b: 1})
        bvq.add_code_vector(CodeVector(...))
        bvq.is_ready  # False, поки всі квоти не 0
    """

    def __init__(
        self,
        code_vectors: Optional[Iterable[CodeVector]] = None,
        quotas: Optional[Mapping[Label, int]] = None,
        learning_rate_fn: LearningRateFunction = default_learning_rate,
        verbose: bool = False,
    ):
        """
        Args:
            code_vectors: Початкові code vectors (одразу Ready)
            quotas: Кількість code vectors для кожного класу (ліниве заповнення)
            learning_rate_fn: Функція (lr0, iteration) → learning rate
            verbose: Виводити прогрес навчання
        """
        if code_vectors is not None and quotas is not None:
            raise ValueError("Pass either code_vectors or quotas, not both.")

        self._write_lock = threading.Lock()
        self._quotas: Optional[Dict[Label, int]] = None
        self._code_vectors: Tuple[CodeVector, ...] = ()

        if quotas is not None:
            self._quotas = dict(quotas)
        elif code_vectors is not None:
            self._code_vectors = tuple(code_vectors)

        self.learning_rate_fn = learning_rate_fn
        self.verbose = verbose

        # Діагностика останнього кроку
        self.last_updated_code_vector: Optional[CodeVector] = None
        self.last_iteration: int = 0

    @classmethod
    def with_quotas(cls, quotas: Mapping[Label, int], **kwargs) -> "BVQClassifier":
        """Класифікатор з лінивим заповненням code vectors"""
        return cls(quotas=quotas, **kwargs)

    # -------------------------------------------------------------------------
    # Стан
    # -------------------------------------------------------------------------

    @property
    def code_vectors(self) -> Tuple[CodeVector, ...]:
        """Поточний знімок code vectors"""
        return self._code_vectors

    @property
    def is_ready(self) -> bool:
        """Чи всі квоти заповнені (або квоти не задавались)"""
        if self._quotas is None:
            return True
        return all(remaining <= 0 for remaining in self._quotas.values())

    @property
    def remaining_quotas(self) -> Optional[Dict[Label, int]]:
        """Копія залишку квот (None, якщо квоти не задані)"""
        if self._quotas is None:
            return None
        return dict(self._quotas)

    def set_learning_rate_function(self, fn: LearningRateFunction) -> None:
        """Замінити функцію learning rate"""
        self.learning_rate_fn = fn

    # -------------------------------------------------------------------------
    # Ліниве заповнення
    # -------------------------------------------------------------------------

    def add_code_vector(self, code_vector: Optional[CodeVector]) -> bool:
        """
        Додати code vector, якщо для його класу ще не вистачає code vectors.

        Args:
            code_vector: Code vector для додавання

        Returns:
            True якщо додано, False якщо квоту класу вже вичерпано
        """
        if self._quotas is None:
            raise QuotasNotConfiguredError(
                "Number of code vectors is not specified, cannot add code vector."
            )
        if code_vector is None or code_vector.point is None:
            return False

        label = code_vector.point.label

        with self._write_lock:
            if label not in self._quotas:
                raise UnknownLabelError(f"Label '{label}' has no configured quota.")

            if self._quotas[label] <= 0:
                return False

            # Публікуємо новий знімок
            self._code_vectors = self._code_vectors + (code_vector,)
            self._quotas[label] -= 1

        return True

    def reset_code_vectors(self, quotas: Mapping[Label, int]) -> None:
        """Очистити code vectors і задати нові квоти"""
        with self._write_lock:
            self._quotas = dict(quotas)
            self._code_vectors = ()
        self.last_updated_code_vector = None
        self.last_iteration = 0

    # -------------------------------------------------------------------------
    # Пошук
    # -------------------------------------------------------------------------

    def nearest_two(self, point: PointLike) -> Tuple[CodeVector, CodeVector]:
        """
        Знайти два найближчі code vectors до точки.

        При рівних відстанях перемагає той, що зустрівся раніше.

        Args:
            point: Точка для пошуку

        Returns:
            (найближчий, другий найближчий)
        """
        code_vectors = self._code_vectors

        if len(code_vectors) < 2:
            raise InsufficientCodeVectorsError(len(code_vectors))
        if point is None:
            raise MissingValueError("Null point passed to BVQ.")

        nearest: List[Optional[CodeVector]] = [None, None]
        distances = [float("inf"), float("inf")]

        for code_vector in code_vectors:
            if code_vector is None:
                raise MissingValueError("Null code vector in the code vector list.")
            if code_vector.point is None:
                raise MissingValueError("Code vector containing null point.")

            distance = code_vector.point.euclidean_distance(point)

            if distance < distances[0]:
                distances[1], nearest[1] = distances[0], nearest[0]
                distances[0], nearest[0] = distance, code_vector
            elif distance < distances[1]:
                distances[1], nearest[1] = distance, code_vector

        if nearest[0] is None or nearest[1] is None:
            raise MissingValueError("Nearest code vectors could not be determined.")

        return nearest[0], nearest[1]

    # -------------------------------------------------------------------------
    # Навчання
    # -------------------------------------------------------------------------

    def _check_ready(self) -> None:
        if not self.is_ready:
            raise NotReadyError("Code vectors are not fully instantiated.")

    def train(self, point: LabeledPoint, lr0: float, iteration: int, delta: float) -> bool:
        """
        Один крок навчання.

        Args:
            point: Навчальна точка з міткою
            lr0: Learning rate на ітерації 0
            iteration: Номер поточної ітерації
            delta: Поріг відстані від точки до межі рішення

        Returns:
            True якщо code vectors оновлено
        """
        self._check_ready()
        if point is None:
            raise MissingValueError("Training point equal to null.")

        learning_rate = self.learning_rate_fn(lr0, iteration)

        first, second = self.nearest_two(point)

        self.last_updated_code_vector = first
        self.last_iteration = iteration

        return first.update(second, point, learning_rate, delta)

    def fit(
        self,
        data_source,
        lr0: float,
        max_iterations: int,
        delta: float,
    ) -> Dict[str, float]:
        """
        Навчити класифікатор на точках з джерела даних (з поверненням).

        Args:
            data_source: DataSource
            lr0: Learning rate на ітерації 0
            max_iterations: Кількість ітерацій
            delta: Поріг відстані від точки до межі рішення

        Returns:
            {iterations, updates, update_ratio}
        """
        self._check_ready()
        if len(self._code_vectors) < 2:
            raise InsufficientCodeVectorsError(len(self._code_vectors))

        if self.verbose:
            print(f"Training BVQ ({len(self._code_vectors)} code vectors)...")
            print(f"  Iterations: {max_iterations}")
            print(f"  lr0: {lr0}, delta: {delta}")

        updates = 0
        for i in tqdm(range(max_iterations), disable=not self.verbose):
            training_point = data_source.draw_labeled_point(False)
            if self.train(training_point, lr0, i, delta):
                updates += 1

        update_ratio = updates / max_iterations if max_iterations > 0 else 0.0

        if self.verbose:
            print(f"  Updates: {updates} ({update_ratio:.2%})")

        return {
            "iterations": max_iterations,
            "updates": updates,
            "update_ratio": update_ratio,
        }

    def fit_with_config(self, data_source, config) -> Dict[str, float]:
        """Навчити з параметрами BVQTrainingConfig"""
        return self.fit(
            data_source,
            lr0=config.learning_rate_init,
            max_iterations=config.max_iterations,
            delta=config.delta,
        )

    # -------------------------------------------------------------------------
    # Передбачення
    # -------------------------------------------------------------------------

    def predict(self, point: PointLike) -> Label:
        """
        Передбачити клас точки (мітка найближчого code vector).

        Args:
            point: Точка для класифікації

        Returns:
            Label
        """
        self._check_ready()
        if point is None:
            raise MissingValueError("Trying to predict a null point.")

        first, _ = self.nearest_two(point)
        return first.point.label

    def __len__(self) -> int:
        return len(self._code_vectors)

    def __repr__(self) -> str:
        status = "ready" if self.is_ready else "not ready"
        return f"BVQClassifier({len(self._code_vectors)} code vectors, {status})"


def unify_code_vectors(*groups: Iterable[CodeVector]) -> List[CodeVector]:
    """
    Об'єднати кілька наборів code vectors (наприклад, з SOM кожного класу).

    Code vector з тією ж міткою і тими ж ознаками, що й раніший,
    відкидається. Порядок зберігається.

    Args:
        *groups: Набори code vectors

    Returns:
        Список унікальних code vectors
    """
    seen = set()
    unified: List[CodeVector] = []

    for group in groups:
        for code_vector in group:
            key = (code_vector.point.label, code_vector.point.features.tobytes())
            if key in seen:
                continue
            seen.add(key)
            unified.append(code_vector)

    return unified
