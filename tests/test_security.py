"""
Tests for the login rate limiter
"""

import pytest

from app.utils import security
from app.utils.security import rate_limit_check, rate_limiter

@pytest.fixture(autouse=True)
def clean_limiter():
    rate_limiter.clear()
    yield
    rate_limiter.clear()

def test_limit_per_ip():
    assert rate_limit_check("10.0.0.1", limit=2)
    assert rate_limit_check("10.0.0.1", limit=2)
    assert not rate_limit_check("10.0.0.1", limit=2)
    # other clients are unaffected
    assert rate_limit_check("10.0.0.2", limit=2)

def test_idle_clients_are_forgotten(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(security.time, "time", lambda: clock[0])

    for i in range(5):
        assert rate_limit_check(f"10.0.0.{i}", limit=3)
    assert len(rate_limiter) == 5

    clock[0] += 61
    assert rate_limit_check("10.0.0.99", limit=3)
    assert list(rate_limiter) == ["10.0.0.99"]

def test_refused_attempt_does_not_store_a_key():
    assert not rate_limit_check("10.0.0.7", limit=0)
    assert "10.0.0.7" not in rate_limiter
