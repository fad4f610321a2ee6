"""
BVQ — Code vector

Code vector — прототип з міткою. Набір code vectors розбиває простір
на області (Вороного), кожна з яких класифікує свої точки.

Оновлення (SGD) для пари найближчих code vectors i, j:
    p      — проєкція навчальної точки x на бісектрису між i та j
    ‖x − p‖ > delta/2  → без оновлення
    beta   = lr · (R(x → j) − R(x → i)) / (delta · ‖i − j‖)
    i     ← i − beta · (i − p)
    j     ← j + beta · (j − p)
"""

from typing import Optional

from .exceptions import MissingValueError
from .point import LabeledPoint, PointLike, VectorPoint


class CodeVector:
    """
    Контейнер для LabeledPoint, що визначає центр області класифікації.

    Рівність — за ідентичністю об'єкта.
    """

    __slots__ = ("point",)

    def __init__(self, point: LabeledPoint):
        """
        Args:
            point: Позиція прототипу з міткою (переходить у власність code vector)
        """
        self.point = point

    @property
    def label(self):
        """Мітка прототипу"""
        return self.point.label

    def project(self, other: "CodeVector", point: PointLike) -> Optional[VectorPoint]:
        """
        Проєкція точки на гіперплощину, що перпендикулярно ділить
        навпіл відрізок між self та other.

        Args:
            other: Другий code vector
            point: Точка для проєкції

        Returns:
            Проєкція або None, якщо code vectors збігаються (межі немає)
        """
        if other is None or other.point is None or self.point is None:
            raise MissingValueError("Code vector containing null point.")

        # Нормаль до поверхні рішення
        normal = self.point.vector.clone().subtract(other.point)

        denominator = normal.scalar_product(normal)
        if denominator == 0.0:
            return None

        # (m − x) · n
        middle = self.point.vector.get_middle_point(other.point)
        middle.subtract(point)
        numerator = middle.scalar_product(normal)

        projected = VectorPoint(point.features)
        projected.sum(normal.product(numerator / denominator))
        return projected

    def update(
        self,
        other: "CodeVector",
        training_point: LabeledPoint,
        learning_rate: float,
        delta: float,
    ) -> bool:
        """
        Оновити позиції self (найближчий) та other (другий найближчий).

        Оновлення відбувається лише якщо відстань від точки до її
        проєкції на межу не перевищує delta/2.

        Args:
            other: Другий найближчий code vector
            training_point: Навчальна точка з міткою
            learning_rate: Learning rate на цій ітерації
            delta: Поріг відстані точки до межі

        Returns:
            True якщо оновлення відбулося
        """
        if training_point is None:
            raise MissingValueError("Training point equal to null.")

        projection = self.project(other, training_point)
        if projection is None:
            return False

        residual = VectorPoint(training_point.features).subtract(projection)
        if residual.norm() > delta / 2:
            return False

        boundary_norm = self.point.vector.clone().subtract(other.point).norm()

        label = training_point.label
        beta = (label.get_risk(other.point.label) - label.get_risk(self.point.label)) / (
            delta * boundary_norm
        )
        beta *= learning_rate

        # Обидва кроки рахуються від позицій до оновлення
        step_self = self.point.vector.clone().subtract(projection).product(beta)
        step_other = other.point.vector.clone().subtract(projection).product(beta)

        self.point.vector.subtract(step_self)
        other.point.vector.sum(step_other)

        return True

    def __repr__(self) -> str:
        return f"CodeVector(features={self.point.features.tolist()}, class={self.point.label})"
