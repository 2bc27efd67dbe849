import logging
import time
from typing import Callable

from ...config.provider import POLL_INTERVAL_SECONDS
from ..api.models import PollerState, PollResult, ProbeOutcome, ProbeResult

logger = logging.getLogger("kubeinterp.poller")


class ReadinessPoller:
    """
    Blocking poll/sleep loop: STARTING -> PROBING -> READY | TIMED_OUT.

    The timeout is only checked between probes, so a slow probe can
    overrun it.
    """

    def __init__(
        self,
        probe: Callable[[], ProbeResult],
        connect_timeout_ms: int,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize poller.

        Args:
            probe: Called once per attempt, returns a ProbeResult
            connect_timeout_ms: Overall budget in milliseconds
            poll_interval: Seconds to sleep after an unsuccessful probe
            clock: Monotonic clock in seconds
            sleep: Sleep function
        """
        self.probe = probe
        self.timeout = connect_timeout_ms / 1000.0
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self.state = PollerState.STARTING

    def poll(self) -> PollResult:
        """
        Probe until READY or the timeout elapses.

        Returns:
            PollResult in state READY (with host) or TIMED_OUT
        """
        start_time = self._clock()
        attempts = 0
        last_error = None
        self.state = PollerState.PROBING

        while self._clock() - start_time < self.timeout:
            attempts += 1
            result = self.probe()

            if result.outcome == ProbeOutcome.READY:
                self.state = PollerState.READY
                elapsed = self._clock() - start_time
                logger.info(f"Remote process ready at {result.host} after {attempts} attempt(s)")
                return PollResult(
                    state=self.state,
                    host=result.host,
                    attempts=attempts,
                    elapsed=elapsed,
                )

            if result.outcome == ProbeOutcome.CLUSTER_ERROR:
                last_error = result.error
                logger.warning(f"Probe {attempts} hit a cluster error: {result.error}")
            else:
                logger.debug(f"Probe {attempts}: not yet ready (host={result.host})")

            self._sleep(self.poll_interval)

        self.state = PollerState.TIMED_OUT
        elapsed = self._clock() - start_time
        logger.error(f"Remote process not reachable after {attempts} attempt(s) in {elapsed:.1f}s")
        return PollResult(
            state=self.state,
            attempts=attempts,
            elapsed=elapsed,
            last_error=last_error,
        )
