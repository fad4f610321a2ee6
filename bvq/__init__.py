"""
BVQ — Bayes Vector Quantizer

Класифікатор на основі векторного квантування з урахуванням
ризиків помилкової класифікації (для незбалансованих класів).

Архітектура: SOM (ініціалізація прототипів кожного класу) + BVQ (навчання меж)

Модулі:
- config: Конфігурація системи
- core: Точки, мітки, code vectors, класифікатор
- som: Self-Organizing Map
- data: Джерела даних та завантаження CSV
- validation: Матриця помилок та метрики
"""

__version__ = "1.0.0"

from .config import BVQConfig, get_default_config
from .core import BVQClassifier, CodeVector, Label, LabeledPoint, VectorPoint
