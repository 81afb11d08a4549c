import pytest

from opentsdb_sdk import OpenTsdbMetric


class FakeTransport:
    """Records posted batches and fails on the requested call numbers."""

    def __init__(self, fail_on=()):
        self.base_url = 'http://tsdb.test:4242'
        self.fail_on = set(fail_on)
        self.calls = []
        self.closed = False

    def post(self, path, payload):
        self.calls.append((path, payload))
        if len(self.calls) in self.fail_on:
            raise ConnectionError(f"boom on call {len(self.calls)}")

    def get(self, path):
        self.calls.append((path, None))

    def close(self):
        self.closed = True


def make_metrics(count, name='sys.cpu.user'):
    return {OpenTsdbMetric(name, 1700000000 + i, float(i), {'host': 'web01'}) for i in range(count)}


@pytest.fixture
def fake_transport():
    return FakeTransport()
