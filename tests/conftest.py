"""Pytest configuration and shared fixtures for carton tests."""

import pytest

import carton._config
from carton._logging import clear_log_hooks

# Payloads whose truthiness or equality must never decide the variant.
PAYLOADS = [1, 'raw', True, False, None, 0, '', float('nan'), {'test': True}]
PAYLOAD_IDS = ['int', 'str', 'true', 'false', 'none', 'zero', 'empty', 'nan', 'dict']


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from carton import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from carton import Err

    return Err(ValueError('test error'))


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from carton import Some

    return Some('hello')


@pytest.fixture
def sample_nothing():
    """Sample Nothing value for testing."""
    from carton import Nothing

    return Nothing


@pytest.fixture(params=PAYLOADS, ids=PAYLOAD_IDS)
def payload(request):
    """Each awkward payload in turn."""
    return request.param


@pytest.fixture
def reset_config():
    """Drop any global configuration and log hooks around the test."""
    carton._config._config = None
    clear_log_hooks()
    yield
    carton._config._config = None
    clear_log_hooks()
