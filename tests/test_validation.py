"""
Тести для модуля validation

Запуск: pytest tests/test_validation.py -v
Або демо: python tests/test_validation.py
"""

import pytest


def make_matrix():
    """
    Матриця 3 класів:

        true \\ pred   A   B   C
        A              5   1   0
        B              2   3   0
        C              0   0   0 (1 точка C передбачена як A)
    """
    from bvq.core import Label
    from bvq.validation import ConfusionMatrix

    a, b, c = Label("A"), Label("B"), Label("C")
    cm = ConfusionMatrix()

    for _ in range(5):
        cm.add_result(a, a)
    cm.add_result(a, b)
    for _ in range(2):
        cm.add_result(b, a)
    for _ in range(3):
        cm.add_result(b, b)
    cm.add_result(c, a)

    return cm, a, b, c


def test_counts():
    """Тест підрахунків по класах"""
    cm, a, b, c = make_matrix()

    assert cm.count_predictions() == 12
    assert cm.total_of_label(a) == 6
    assert cm.total_of_label(b) == 5
    assert cm.total_of_label(c) == 1
    assert cm.positives_of_label(a) == 8
    assert cm.positives_of_label(b) == 4
    assert cm.positives_of_label(c) == 0
    assert cm.negatives_of_label(a) == 6
    assert cm.true_positives_of_label(a) == 5
    assert cm.labels == {a, b, c}

    print(f"✓ {cm}")


def test_metrics():
    """Тест accuracy, recall, precision, F1"""
    cm, a, b, c = make_matrix()

    assert cm.accuracy() == pytest.approx(8 / 12)
    assert cm.recall(a) == pytest.approx(5 / 6)
    assert cm.precision(a) == pytest.approx(5 / 8)
    assert cm.f1_score(a) == pytest.approx(2 * (5 / 6) * (5 / 8) / (5 / 6 + 5 / 8))
    assert cm.recall(b) == pytest.approx(3 / 5)
    assert cm.precision(b) == pytest.approx(3 / 4)

    print(f"✓ Accuracy {cm.accuracy():.3f}, F1(A) {cm.f1_score(a):.3f}")


def test_zero_denominators():
    """Тест: порожні знаменники дають 0"""
    from bvq.core import Label
    from bvq.validation import ConfusionMatrix

    cm, a, b, c = make_matrix()
    assert cm.precision(c) == 0.0
    assert cm.recall(c) == 0.0
    assert cm.f1_score(c) == 0.0

    empty = ConfusionMatrix()
    assert empty.accuracy() == 0.0
    assert empty.recall(Label("X")) == 0.0
    assert empty.windowed_accuracy() == 0.0

    print("✓ Zero denominators → 0.0")


def test_windowed_accuracy():
    """Тест ковзного вікна та падіння точності"""
    from bvq.core import Label
    from bvq.validation import ConfusionMatrix

    a, b = Label("A"), Label("B")
    cm = ConfusionMatrix(window=4, best_accuracy_floor=0.5)

    for _ in range(4):
        cm.add_result(a, a)
    cm.accuracy()
    assert cm.windowed_accuracy() == 1.0
    assert cm.accuracy_variation() == 0.0

    # Дві помилки витісняють два правильні результати з вікна
    cm.add_result(a, b)
    cm.add_result(b, a)
    cm.accuracy()
    assert cm.windowed_accuracy() == 0.5
    assert cm.accuracy_variation() == pytest.approx(0.5)

    cm.reset_variation()
    assert cm.accuracy_variation() == 0.0

    print("✓ Windowed accuracy and variation")


def test_min_iterations():
    """Тест: максимум у вікні не відстежується до min_iterations викликів"""
    from bvq.core import Label
    from bvq.validation import ConfusionMatrix

    a = Label("A")
    cm = ConfusionMatrix(window=10, min_iterations=3, best_accuracy_floor=0.0)

    cm.add_result(a, a)
    cm.accuracy()
    cm.accuracy()
    assert cm.accuracy_variation() == 0.0

    print("✓ Variation suppressed during warm-up")


def test_monitored_class_f1():
    """Тест ковзного середнього F1 для обраного класу"""
    from bvq.core import Label
    from bvq.validation import ConfusionMatrix

    a, b = Label("A"), Label("B")
    cm = ConfusionMatrix(window=4, best_accuracy_floor=0.5, monitored_class=a)

    for _ in range(2):
        cm.add_result(a, a)
        cm.add_result(b, b)
    assert cm.f1_score(a) == 1.0
    assert cm.windowed_f1_score() == 1.0
    assert cm.f1_score_variation() == 0.0

    # Recall(A) = 0.5, precision(A) = 1.0 → F1 = 2/3
    cm.add_result(a, b)
    cm.add_result(a, b)
    assert cm.f1_score(a) == pytest.approx(2 / 3)
    assert cm.windowed_f1_score() == pytest.approx(5 / 6)
    assert cm.f1_score_variation() == pytest.approx(1 / 6)

    # Інший клас не потрапляє у вікно
    cm.f1_score(b)
    assert cm.windowed_f1_score() == pytest.approx(5 / 6)

    cm.reset_variation()
    assert cm.f1_score_variation() == 0.0

    untracked = ConfusionMatrix()
    untracked.add_result(a, a)
    untracked.f1_score(a)
    assert untracked.windowed_f1_score() == 0.0

    print("✓ Windowed F1 of the monitored class")


def test_to_dict_keeps_window_statistics():
    """Тест: to_dict не змінює статистику ковзних вікон"""
    from bvq.core import Label
    from bvq.validation import ConfusionMatrix

    a, b = Label("A"), Label("B")
    cm = ConfusionMatrix(window=4, best_accuracy_floor=0.5, monitored_class=a)

    for _ in range(4):
        cm.add_result(a, a)
    cm.accuracy()
    cm.add_result(a, b)
    cm.add_result(b, a)

    assert cm.accuracy_variation() == 0.0
    data = cm.to_dict()
    assert data["accuracy"] == pytest.approx(4 / 6)
    assert cm.accuracy_variation() == 0.0
    assert cm.windowed_f1_score() == 0.0

    print("✓ to_dict has no side effects")


def test_to_dict_and_reset():
    """Тест серіалізації та очищення"""
    cm, a, b, c = make_matrix()

    data = cm.to_dict()
    assert data["total"] == 12
    assert data["matrix"]["B"]["A"] == 2
    assert data["matrix"]["C"]["C"] == 0
    assert data["per_class"]["A"]["recall"] == pytest.approx(5 / 6)

    cm.reset()
    assert cm.count_predictions() == 0
    assert cm.labels == set()

    print("✓ to_dict, reset")


def test_evaluate_classifier():
    """Тест оцінки класифікатора"""
    from bvq.core import BVQClassifier, CodeVector, Label, LabeledPoint
    from bvq.validation import ConfusionMatrix, evaluate_classifier

    a, b = Label("A"), Label("B")
    bvq = BVQClassifier(code_vectors=[
        CodeVector(LabeledPoint([0.0], a)),
        CodeVector(LabeledPoint([10.0], b)),
    ])

    points = [
        LabeledPoint([1.0], a),
        LabeledPoint([2.0], a),
        LabeledPoint([9.0], b),
        LabeledPoint([4.0], b),  # ближче до A
    ]

    cm = evaluate_classifier(bvq, points)
    assert cm.count_predictions() == 4
    assert cm.accuracy() == pytest.approx(0.75)
    assert cm.recall(b) == pytest.approx(0.5)

    # Доповнення існуючої матриці
    existing = ConfusionMatrix()
    result = evaluate_classifier(bvq, points[:2], matrix=existing)
    assert result is existing
    assert existing.count_predictions() == 2

    print(f"✓ Evaluated: accuracy {cm.accuracy():.2f}")


def demo():
    """Повна демонстрація модуля validation"""
    print("=" * 60)
    print("BVQ — Демонстрація модуля validation")
    print("=" * 60)

    test_counts()
    test_metrics()
    test_zero_denominators()
    test_windowed_accuracy()
    test_min_iterations()
    test_monitored_class_f1()
    test_to_dict_keeps_window_statistics()
    test_to_dict_and_reset()
    test_evaluate_classifier()

    print("\n" + "=" * 60)
    print("✅ Всі тести пройдено успішно!")
    print("=" * 60)


if __name__ == "__main__":
    demo()
