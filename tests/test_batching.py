import pytest

from opentsdb_sdk import partition

from conftest import make_metrics


@pytest.mark.parametrize('count', [0, 1, 2, 3, 7, 10, 25])
@pytest.mark.parametrize('limit', [0, 1, 2, 3, 5, 30])
def test_batches_cover_input_exactly(count, limit):
    metrics = make_metrics(count)
    batches = partition(metrics, limit)

    flattened = [metric for batch in batches for metric in batch]
    assert len(flattened) == len(metrics)
    assert set(flattened) == metrics


@pytest.mark.parametrize('count', [1, 4, 9, 10, 11])
@pytest.mark.parametrize('limit', [1, 3, 10])
def test_batches_respect_limit(count, limit):
    batches = partition(make_metrics(count), limit)

    assert all(len(batch) <= limit for batch in batches)
    assert all(batch for batch in batches)


@pytest.mark.parametrize('count', [0, 5, 100])
def test_zero_limit_produces_single_batch(count):
    metrics = make_metrics(count)
    batches = partition(metrics, 0)

    assert len(batches) == 1
    assert set(batches[0]) == metrics


def test_input_within_limit_is_one_batch():
    assert len(partition(make_metrics(3), 3)) == 1


def test_seven_metrics_with_limit_three():
    batches = partition(make_metrics(7), 3)

    assert sorted(len(batch) for batch in batches) == [1, 3, 3]


def test_exact_multiple_has_no_trailing_empty_batch():
    batches = partition(make_metrics(6), 3)

    assert [len(batch) for batch in batches] == [3, 3]


def test_negative_limit_is_rejected():
    with pytest.raises(ValueError):
        partition(make_metrics(2), -1)


def test_input_is_not_modified():
    metrics = make_metrics(5)
    snapshot = set(metrics)
    partition(metrics, 2)

    assert metrics == snapshot
