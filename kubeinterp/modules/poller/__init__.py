"""
Poller Module - Black Box Interface

Purpose: Wait until a remote process is reachable, bounded by a timeout
Interface: ReadinessPoller.poll()
Hidden: Probe scheduling, timing, state transitions

Each probe reports an explicit ProbeOutcome; the poller never interprets exceptions.
"""

from .poller import ReadinessPoller

__all__ = ["ReadinessPoller"]
