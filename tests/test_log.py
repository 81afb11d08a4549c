import logging

import pytest

from opentsdb_sdk import setup_logging


def test_setup_logging_applies_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

    setup_logging('debug')

    assert calls[0]['level'] == logging.DEBUG
    assert '%(levelname)s' in calls[0]['format']


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging('chatty')
