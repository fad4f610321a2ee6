"""
Тести для модуля data

Запуск: pytest tests/test_data.py -v
Або демо: python tests/test_data.py
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest


CSV_CONTENT = """x1;x2;class
1.0;10.0;"1"
2.0;20.0;"1"
3.0;30.0;"2"
4.0;40.0;"2"
5.0;50.0;"3"
"""


def make_points():
    from bvq.core import Label, LabeledPoint

    a = Label("A")
    b = Label("B")
    points = [LabeledPoint([float(i)], a) for i in range(8)]
    points += [LabeledPoint([100.0 + i], b) for i in range(2)]
    return points, a, b


def test_draw_with_replacement():
    """Тест вибірки з поверненням"""
    from bvq.data import InMemoryDataSource

    points, a, b = make_points()
    source = InMemoryDataSource(points, seed=1)

    for _ in range(50):
        assert source.draw_labeled_point() in points
    assert source.pool_size == len(points)

    print("✓ Draw with replacement keeps the pool")


def test_draw_without_replacement():
    """Тест вибірки без повернення: кожна точка рівно раз, потім пул оновлюється"""
    from bvq.data import InMemoryDataSource

    points, _, _ = make_points()
    source = InMemoryDataSource(points, seed=2)

    drawn = [source.draw_labeled_point(True) for _ in range(len(points))]
    assert len({id(p) for p in drawn}) == len(points)
    assert source.pool_size == 0

    # Порожній пул заповнюється знову
    source.draw_labeled_point(True)
    assert source.pool_size == len(points) - 1

    print("✓ Draw without replacement exhausts then refills the pool")


def test_draw_by_label():
    """Тест вибірки за міткою"""
    from bvq.data import InMemoryDataSource

    points, a, b = make_points()
    source = InMemoryDataSource(points, seed=3)

    for _ in range(30):
        assert source.draw_labeled_point(False, b).label == b

    # Без повернення: дві точки B, потім пул скидається
    first = source.draw_labeled_point(True, b)
    second = source.draw_labeled_point(True, b)
    third = source.draw_labeled_point(True, b)
    assert first is not second
    assert third.label == b

    print("✓ Label-filtered draws")


def test_draw_mixed_without_replacement():
    """Тест: змішані вибірки за міткою та без неї вичерпують пул без повторів"""
    from bvq.data import InMemoryDataSource

    points, a, b = make_points()

    for seed in range(5):
        source = InMemoryDataSource(points, seed=seed)

        drawn = [source.draw_labeled_point(True, b)]
        drawn += [source.draw_labeled_point(True, a) for _ in range(8)]
        assert all(p.label == a for p in drawn[1:])

        # Лишилась одна точка, і це друга точка B
        assert source.pool_size == 1
        last = source.draw_labeled_point(True)
        assert last.label == b
        drawn.append(last)

        assert len({id(p) for p in drawn}) == len(points)
        assert source.pool_size == 0

    # Після вибірок без мітки індекс класів лишається узгодженим
    source = InMemoryDataSource(points, seed=11)
    for _ in range(6):
        source.draw_labeled_point(True)
    for _ in range(6):
        assert source.draw_labeled_point(True, b).label == b
        assert source.draw_labeled_point(True, a).label == a

    print("✓ Mixed draws keep the label index consistent")


def test_draw_missing_label():
    """Тест: мітки немає в даних або джерело порожнє"""
    from bvq.core import DataSourceError, Label
    from bvq.data import InMemoryDataSource

    points, _, _ = make_points()
    source = InMemoryDataSource(points, seed=4)

    with pytest.raises(DataSourceError):
        source.draw_labeled_point(False, Label("missing"))

    with pytest.raises(DataSourceError):
        InMemoryDataSource([]).draw_labeled_point()

    print("✓ Missing label rejected")


def test_source_helpers():
    """Тест допоміжних методів джерела"""
    from bvq.data import InMemoryDataSource

    points, a, b = make_points()
    source = InMemoryDataSource(points, seed=5)

    assert len(source) == 10
    assert source.labels == {a, b}
    assert source.class_counts() == {a: 8, b: 2}
    assert source.all_points() == points

    code_vectors = source.random_code_vectors(4)
    assert len(code_vectors) == 4
    assert source.pool_size == len(points)
    for cv in code_vectors:
        assert all(cv.point is not p for p in points)

    print(f"✓ {source}")


def write_csv(directory, content=CSV_CONTENT):
    path = Path(directory) / "data.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_csv_loader():
    """Тест завантаження CSV"""
    from bvq.core import Label
    from bvq.data import CSVDatasetLoader

    one, two = Label("1"), Label("2")

    with tempfile.TemporaryDirectory() as tmpdir:
        loader = CSVDatasetLoader(
            str(write_csv(tmpdir)), labels=[one, two], label_column=2, skip_header=True
        )
        points = loader.load()

    assert len(points) == 4
    assert loader.skipped_rows == 1
    assert loader.n_features == 2
    assert points[0].label is one
    assert points[3].label is two
    np.testing.assert_allclose(points[2].features, [3.0, 30.0])
    np.testing.assert_allclose(loader.min_max, [[1.0, 4.0], [10.0, 40.0]])

    print(f"✓ Loaded {loader}")


def test_csv_loader_label_first():
    """Тест CSV з міткою в першій колонці та роздільником в кінці рядка"""
    from bvq.core import Label
    from bvq.data import CSVDatasetLoader

    a = Label("a")

    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_csv(tmpdir, "a,1.5,2.5,\na,0.5,3.5,\n")
        loader = CSVDatasetLoader(str(path), labels=[a], separator=",", label_column=0)
        points = loader.load()

    assert len(points) == 2
    np.testing.assert_allclose(points[1].features, [0.5, 3.5])

    print("✓ Label column 0, trailing separator")


def test_csv_loader_errors():
    """Тест помилок завантаження"""
    from bvq.core import Label
    from bvq.data import CSVDatasetLoader

    with pytest.raises(FileNotFoundError):
        CSVDatasetLoader("/nonexistent/data.csv", labels=[Label("1")]).load()

    with tempfile.TemporaryDirectory() as tmpdir:
        loader = CSVDatasetLoader(str(write_csv(tmpdir)), labels=[])
        with pytest.raises(ValueError):
            loader.load()

    loader = CSVDatasetLoader("unused.csv", labels=[Label("1")])
    with pytest.raises(RuntimeError):
        loader.normalize()
    with pytest.raises(RuntimeError):
        loader.split(0.5)

    print("✓ Loader errors")


def test_csv_normalize_and_split():
    """Тест нормалізації та поділу train/test"""
    from bvq.core import Label
    from bvq.data import CSVDatasetLoader

    one, two = Label("1"), Label("2")

    with tempfile.TemporaryDirectory() as tmpdir:
        loader = CSVDatasetLoader(
            str(write_csv(tmpdir)), labels=[one, two], label_column=-1, skip_header=True
        )
        loader.load()

    loader.normalize()
    features = np.array([p.features for p in loader.points])
    np.testing.assert_allclose(features[:, 0], [0.0, 1 / 3, 2 / 3, 1.0])
    np.testing.assert_allclose(features[:, 1], [0.0, 1 / 3, 2 / 3, 1.0])

    train, test = loader.split(test_ratio=0.25, seed=42)
    assert len(train) == 3
    assert len(test) == 1
    assert {id(p) for p in train.all_points()}.isdisjoint({id(p) for p in test.all_points()})

    with pytest.raises(ValueError):
        loader.split(1.0)

    source = loader.to_data_source(seed=1)
    assert len(source) == 4

    print(f"✓ Train {len(train)}, test {len(test)}")


def demo():
    """Повна демонстрація модуля data"""
    print("=" * 60)
    print("BVQ — Демонстрація модуля data")
    print("=" * 60)

    test_draw_with_replacement()
    test_draw_without_replacement()
    test_draw_by_label()
    test_draw_mixed_without_replacement()
    test_draw_missing_label()
    test_source_helpers()
    test_csv_loader()
    test_csv_loader_label_first()
    test_csv_loader_errors()
    test_csv_normalize_and_split()

    print("\n" + "=" * 60)
    print("✅ Всі тести пройдено успішно!")
    print("=" * 60)


if __name__ == "__main__":
    demo()
