import pytest

from models.plot_models import DataPoint
from services.stats_engine import compute_dataset_stats


def test_stats_for_linear_points():
    points = [DataPoint(x=1, y=2), DataPoint(x=2, y=4), DataPoint(x=3, y=6)]
    stats = compute_dataset_stats("line.csv", points)

    assert stats.count == 3
    assert stats.x.min == 1.0
    assert stats.x.max == 3.0
    assert stats.x.mean == pytest.approx(2.0)
    assert stats.x.std == pytest.approx(1.0)
    assert stats.y.mean == pytest.approx(4.0)
    assert stats.correlation == pytest.approx(1.0)


def test_stats_single_point_has_no_spread():
    stats = compute_dataset_stats("one.csv", [DataPoint(x=5, y=7)])
    assert stats.count == 1
    assert stats.x.mean == 5.0
    assert stats.x.std is None
    assert stats.correlation is None


def test_stats_flat_series_has_no_correlation():
    points = [DataPoint(x=1, y=3), DataPoint(x=2, y=3), DataPoint(x=3, y=3)]
    assert compute_dataset_stats("flat.csv", points).correlation is None


def test_stats_empty_dataset():
    stats = compute_dataset_stats("empty.csv", [])
    assert stats.count == 0
    assert stats.x is None
    assert stats.y is None
