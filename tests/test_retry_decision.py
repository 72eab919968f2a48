"""Tests for RetryDecision and NoRetry"""

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from retrykit.domain.models.retry_decision import RetryDecision
from retrykit.domain.policies.no_retry import NoRetry


def test_decision_equality_is_by_value():
    assert RetryDecision(True, timedelta(milliseconds=5)) == RetryDecision(
        True, timedelta(milliseconds=5)
    )
    assert RetryDecision(True, timedelta(0)) != RetryDecision(False, timedelta(0))
    assert RetryDecision(True, timedelta(0)) != RetryDecision(True, timedelta(microseconds=1))


def test_decision_is_immutable():
    decision = RetryDecision(True, timedelta(seconds=1))
    with pytest.raises(FrozenInstanceError):
        decision.should_retry = False


def test_negative_wait_time_rejected():
    with pytest.raises(ValueError, match="wait_time"):
        RetryDecision(True, timedelta(milliseconds=-1))


def test_give_up():
    decision = RetryDecision.give_up()
    assert decision.should_retry is False
    assert decision.wait_time == timedelta(0)


def test_retry_after_and_wait_seconds():
    decision = RetryDecision.retry_after(timedelta(milliseconds=1500))
    assert decision.should_retry is True
    assert decision.wait_seconds == pytest.approx(1.5)


def test_no_retry_always_gives_up():
    policy = NoRetry()
    for count in (0, 1, 50):
        assert policy.get_retry_decision(count, RuntimeError("boom")) == RetryDecision.give_up()
