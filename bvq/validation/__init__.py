"""
BVQ — Validation Module

Метрики якості класифікатора:
- ConfusionMatrix (accuracy, recall, precision, F1)
- evaluate_classifier — прогнати тестові точки через класифікатор

Приклад використання:
    from bvq.validation import evaluate_classifier

    cm = evaluate_classifier(bvq, test.all_points())
    print(f"Accuracy: {cm.accuracy():.2%}")
    for label in cm.labels:
        print(f"  {label}: F1={cm.f1_score(label):.3f}")
"""

from .confusion_matrix import ConfusionMatrix, evaluate_classifier


__all__ = [
    "ConfusionMatrix",
    "evaluate_classifier",
]
