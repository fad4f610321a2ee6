"""
BVQ — Мітка класу

Кожна мітка має таблицю ризиків: наскільки дорого помилково
віднести точку цього класу до іншого класу.
"""

from typing import Dict, Mapping, Optional


# Ризик для незаданої пари класів (максимальний)
DEFAULT_RISK = 1.0


class Label:
    """
    Мітка класу з таблицею ризиків помилкової класифікації.

    Рівність і хеш визначаються лише назвою.

    Приклад використання:
        minority = Label("fraud")
        majority = Label("ok")

        minority.assign_misclassification_cost(majority, 1.0)
        majority.assign_misclassification_cost(minority, 0.2)

        minority.get_risk(majority)  # 1.0
        minority.get_risk(minority)  # 0.0
    """

    __slots__ = ("_name", "risks")

    def __init__(self, name: str, risks: Optional[Mapping[str, float]] = None):
        """
        Args:
            name: Назва класу
            risks: Початкові ризики {назва іншого класу: ризик}
        """
        self._name = str(name)
        self.risks: Dict[str, float] = dict(risks) if risks else {}
        # Ризик для себе завжди 0
        self.risks[self._name] = 0.0

    @property
    def name(self) -> str:
        """Назва класу"""
        return self._name

    def assign_misclassification_cost(self, other: "Label", risk: float) -> None:
        """
        Задати ризик віднесення точки цього класу до класу other.

        Args:
            other: Інша мітка
            risk: Значення ризику (зазвичай у [0, 1])
        """
        self.risks[other.name] = float(risk)

    def get_risk(self, other: "Label") -> float:
        """Ризик помилки self → other (DEFAULT_RISK для незаданих)"""
        return self.risks.get(other.name, DEFAULT_RISK)

    def __eq__(self, other) -> bool:
        if isinstance(other, Label):
            return other.name == self._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Label({self._name!r})"
