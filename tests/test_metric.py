from datetime import datetime

import pytest
import pytz

from opentsdb_sdk import OpenTsdbMetric


def test_equal_metrics_collapse_in_a_set():
    first = OpenTsdbMetric('sys.cpu.user', 1700000000, 42.5, {'host': 'web01', 'cpu': '0'})
    second = OpenTsdbMetric('sys.cpu.user', 1700000000, 42.5, {'cpu': '0', 'host': 'web01'})

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_metrics_differing_by_tag_are_distinct():
    first = OpenTsdbMetric('sys.cpu.user', 1700000000, 1, {'host': 'web01'})
    second = OpenTsdbMetric('sys.cpu.user', 1700000000, 1, {'host': 'web02'})

    assert first != second
    assert len({first, second}) == 2


def test_tags_are_copied_and_read_only():
    tags = {'host': 'web01'}
    metric = OpenTsdbMetric('sys.cpu.user', 1700000000, 1, tags)
    tags['host'] = 'changed'

    assert metric.tags['host'] == 'web01'
    with pytest.raises(TypeError):
        metric.tags['host'] = 'web02'


def test_metric_is_frozen():
    metric = OpenTsdbMetric('sys.cpu.user', 1700000000, 1)
    with pytest.raises(AttributeError):
        metric.value = 2


@pytest.mark.parametrize('kwargs', [
    {'metric': '', 'timestamp': 1, 'value': 1},
    {'metric': None, 'timestamp': 1, 'value': 1},
    {'metric': 'm', 'timestamp': 1.5, 'value': 1},
    {'metric': 'm', 'timestamp': True, 'value': 1},
    {'metric': 'm', 'timestamp': 1, 'value': '12'},
    {'metric': 'm', 'timestamp': 1, 'value': False},
    {'metric': 'm', 'timestamp': 1, 'value': 1, 'tags': {'host': 1}},
])
def test_invalid_metrics_are_rejected(kwargs):
    with pytest.raises(ValueError):
        OpenTsdbMetric(**kwargs)


def test_to_dict_matches_put_format():
    metric = OpenTsdbMetric('sys.cpu.user', 1700000000, 42.5, {'host': 'web01'})

    assert metric.to_dict() == {
        'metric': 'sys.cpu.user',
        'timestamp': 1700000000,
        'value': 42.5,
        'tags': {'host': 'web01'},
    }


def test_named_defaults_timestamp_to_now():
    before = int(datetime.now(pytz.UTC).timestamp())
    metric = OpenTsdbMetric.named('sys.cpu.user', 3)
    after = int(datetime.now(pytz.UTC).timestamp())

    assert before <= metric.timestamp <= after
    assert dict(metric.tags) == {}


def test_named_keeps_explicit_timestamp():
    metric = OpenTsdbMetric.named('sys.cpu.user', 3, {'host': 'web01'}, timestamp=1234)

    assert metric.timestamp == 1234
    assert metric.tags == {'host': 'web01'}
