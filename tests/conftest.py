"""Pytest configuration and fixtures."""
import pytest
from request_signer.config import settings
from request_signer.logging_utils import configure_logging, logger
from request_signer.signer import RequestSigner
from helpers import FIXED_NOW, TEST_PREFIX, TEST_SECRET


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Point the global settings at test values."""
    monkeypatch.setenv("SIGNER_SECRET", TEST_SECRET)
    monkeypatch.setenv("SIGNER_PREFIX", TEST_PREFIX)
    monkeypatch.setattr(settings, "secret", TEST_SECRET)
    monkeypatch.setattr(settings, "prefix", TEST_PREFIX)
    monkeypatch.setattr(settings, "api_key", None)
    yield


@pytest.fixture
def signer():
    """Signer with a frozen clock."""
    return RequestSigner(TEST_SECRET, TEST_PREFIX, clock=lambda: FIXED_NOW)


@pytest.fixture
def captured(caplog):
    """Attach caplog to the package logger (it does not propagate to root)."""
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
    configure_logging("INFO")
