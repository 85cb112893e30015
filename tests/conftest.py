"""
Shared fixtures for condition engine tests.
"""

import pytest

from condition_engine.rules.engine import ConditionEngine
from condition_engine.rules.registry import OperatorRegistry
from condition_engine.shared.config import EngineConfig
from condition_engine.shared.logging import configure_logging
from condition_engine.shared.metrics import EngineMetrics


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep registry/debug chatter out of test output."""
    configure_logging("condition_engine", log_level="warning")


@pytest.fixture
def metrics():
    return EngineMetrics()


@pytest.fixture
def registry(metrics):
    return OperatorRegistry(metrics=metrics)


@pytest.fixture
def engine(registry, metrics):
    """Engine with its own registry, isolated from the default engine."""
    return ConditionEngine(registry=registry, metrics=metrics, config=EngineConfig())


@pytest.fixture
def data():
    return {
        "age": 25,
        "country": "TH",
        "score": 88.5,
        "tags": ["a", "b", "c"],
        "desc": "hello world",
        "empty": "",
        "nil": None,
        "boolTrue": True,
        "boolFalse": False,
        "dateStr": "2024-07-01T12:00:00Z",
    }
