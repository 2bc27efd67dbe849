"""
Launcher Module - Black Box Interface

Purpose: Run the local interpreter launch script and check remote reachability
Interface: RemoteProcessLauncher.execute_command(), is_reachable(), stop()
Hidden: subprocess handling, output draining, TCP connect details

Subclasses decide where the interpreter actually runs by overriding
start() and _stop_endpoint().
"""

from .launcher import RemoteProcessLauncher

__all__ = ["RemoteProcessLauncher"]
