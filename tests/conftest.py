"""Shared fixtures."""

import pytest

from token_estimate.estimator import DEFAULT_ESTIMATOR, KIMI_K2_ESTIMATOR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TOKEN_ESTIMATE_* settings from the host environment out of tests."""
    for key in (
        "PRESET",
        "SAMPLING_THRESHOLD",
        "SAMPLING_SIZE",
        "REFERENCE_MODEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"TOKEN_ESTIMATE_{key}", raising=False)


@pytest.fixture
def default_config():
    return DEFAULT_ESTIMATOR


@pytest.fixture
def kimi_config():
    return KIMI_K2_ESTIMATOR


@pytest.fixture
def mixed_long_text():
    """2000 code points: 1000 'a' followed by 1000 '中'."""
    return "a" * 1000 + "中" * 1000
