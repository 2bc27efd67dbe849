"""
Unit tests for the ReadinessPoller state machine.
"""

from unittest.mock import MagicMock

import pytest

from kubeinterp.modules.api import PollerState, ProbeResult
from kubeinterp.modules.poller import ReadinessPoller


def _poller(probe, fake_clock, timeout_ms=1000, interval=0.5):
    return ReadinessPoller(
        probe, timeout_ms, poll_interval=interval, clock=fake_clock, sleep=fake_clock.sleep
    )


def test_starts_in_starting_state(fake_clock):
    poller = _poller(MagicMock(), fake_clock)
    assert poller.state == PollerState.STARTING


def test_ready_on_first_probe(fake_clock):
    probe = MagicMock(return_value=ProbeResult.ready("10.96.0.1"))
    poller = _poller(probe, fake_clock)

    result = poller.poll()

    assert result.state == PollerState.READY
    assert result.host == "10.96.0.1"
    assert result.attempts == 1
    assert poller.state == PollerState.READY
    assert fake_clock.sleeps == []


def test_ready_within_one_interval(fake_clock):
    probe = MagicMock(
        side_effect=[ProbeResult.not_yet_ready(), ProbeResult.ready("10.96.0.1")]
    )

    result = _poller(probe, fake_clock, timeout_ms=5000).poll()

    assert result.is_ready
    assert result.attempts == 2
    assert fake_clock.sleeps == [0.5]
    assert result.elapsed == pytest.approx(0.5)


def test_times_out_without_raising(fake_clock):
    """1000ms budget at 500ms intervals allows at most two probes."""
    probe = MagicMock(return_value=ProbeResult.not_yet_ready())
    poller = _poller(probe, fake_clock, timeout_ms=1000)

    result = poller.poll()

    assert result.state == PollerState.TIMED_OUT
    assert result.host is None
    assert probe.call_count == 2
    assert result.attempts == 2
    assert poller.state == PollerState.TIMED_OUT


def test_cluster_errors_are_retried(fake_clock):
    probe = MagicMock(
        side_effect=[
            ProbeResult.cluster_error("connection refused"),
            ProbeResult.cluster_error("connection refused"),
            ProbeResult.ready("10.96.0.4"),
        ]
    )

    result = _poller(probe, fake_clock, timeout_ms=5000).poll()

    assert result.is_ready
    assert result.attempts == 3


def test_timeout_reports_last_cluster_error(fake_clock):
    probe = MagicMock(return_value=ProbeResult.cluster_error("forbidden"))

    result = _poller(probe, fake_clock).poll()

    assert result.state == PollerState.TIMED_OUT
    assert result.last_error == "forbidden"


def test_timeout_checked_only_between_probes(fake_clock):
    """A slow probe may overrun the budget; no further probe is made."""

    def slow_probe():
        fake_clock.now += 3.0
        return ProbeResult.not_yet_ready()

    probe = MagicMock(side_effect=slow_probe)

    result = _poller(probe, fake_clock, timeout_ms=1000).poll()

    assert result.state == PollerState.TIMED_OUT
    assert probe.call_count == 1
    assert result.elapsed == pytest.approx(3.5)


def test_zero_timeout_never_probes(fake_clock):
    probe = MagicMock()

    result = _poller(probe, fake_clock, timeout_ms=0).poll()

    assert result.state == PollerState.TIMED_OUT
    probe.assert_not_called()
