import logging

import pytest

from rootest import logconfig
from rootest.roots import BisectionEstimator


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logconfig.disable_logging()


def test_null_handler():
    logger = logging.getLogger("rootest")
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_enable_console_logging():
    handler = logconfig.enable_console_logging("DEBUG")
    logger = logging.getLogger("rootest")
    assert handler in logger.handlers
    assert logger.level == logging.DEBUG

    logconfig.set_level("ERROR")
    assert handler.level == logging.ERROR

    logconfig.disable_logging()
    assert handler not in logger.handlers


def test_configure_from_env(monkeypatch):
    logger = logging.getLogger("rootest")
    monkeypatch.setenv("ROOTEST_LOGGING", "debug")
    logconfig.configure_from_env()
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, logging.StreamHandler) for h in logger.handlers) == 1

    monkeypatch.setenv("ROOTEST_LOGGING", "nonsense")
    logconfig.configure_from_env()
    assert logger.level == logging.DEBUG


def test_estimation_is_logged(caplog):
    estimator = BisectionEstimator(lambda x: x - 0.5)

    with caplog.at_level(logging.DEBUG, logger="rootest"):
        estimator.estimate()
        BisectionEstimator(lambda x: 1.0).estimate()

    messages = [r.getMessage() for r in caplog.records]
    assert any("BisectionEstimator succeeded" in m for m in messages)
    assert any("BisectionEstimator failed" in m for m in messages)
