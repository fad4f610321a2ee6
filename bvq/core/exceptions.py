"""
BVQ — Винятки

Всі помилки ядра є порушеннями передумов або інваріантів:
їх не повторюють і не приглушують, виклик просто відхиляється.
"""


class BVQError(RuntimeError):
    """Базова помилка класифікатора BVQ"""


class DimensionMismatchError(BVQError, ValueError):
    """Операнди мають різну розмірність"""

    def __init__(self, operation: str, left: int, right: int):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(
            f"Operands of {operation} must have same dimensions ({left} != {right})."
        )


class InsufficientCodeVectorsError(BVQError):
    """Менше двох code vectors"""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"There aren't enough code vectors ({count}). "
            f"There must be at least 2 code vectors."
        )


class MissingValueError(BVQError, ValueError):
    """Відсутня точка, code vector або точка code vector"""


class NotReadyError(BVQError):
    """Не всі квоти code vectors заповнені"""


class QuotasNotConfiguredError(BVQError):
    """Квоти не задані, додавати code vectors не можна"""


class UnknownLabelError(BVQError, KeyError):
    """Для мітки не задана квота"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class SOMError(RuntimeError):
    """Базова помилка SOM"""


class GridSizeError(SOMError, ValueError):
    """Кількість кластерів не є повним квадратом"""

    def __init__(self, n_clusters: int):
        self.n_clusters = n_clusters
        super().__init__(
            f"Number of clusters must have an integer square root "
            f"(n*n = n_clusters where n is an int), got {n_clusters}."
        )


class DataSourceError(RuntimeError):
    """Джерело даних не може видати точку"""
