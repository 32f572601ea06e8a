"""Tests of the log configuration."""

import io

import pytest
from loguru import logger
from mrrd.data import Dataset
from mrrd.utils.log import start_log, stop_log


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    start_log('DEBUG', stream)
    yield stream
    stop_log()


def test_log_enabled(log_stream, tmp_path):
    """Messages of the library reach the sink after start_log."""
    Dataset(tmp_path / 'log.h5').close()
    assert 'Opened dataset' in log_stream.getvalue()
    assert 'Closed dataset' in log_stream.getvalue()


def test_log_disabled(tmp_path):
    """The library is silent unless the log is started."""
    stream = io.StringIO()
    sink_id = logger.add(stream, level='DEBUG')
    try:
        Dataset(tmp_path / 'log.h5').close()
    finally:
        logger.remove(sink_id)
    assert stream.getvalue() == ''
