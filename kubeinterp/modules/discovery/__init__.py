"""
Discovery Module - Black Box Interface

Purpose: Find the running driver pod of a remote process
Interface: find_running_pod()
Hidden: Label selectors, phase matching, list error handling

List failures and "no match" both return None so callers simply retry.
"""

from .discovery import find_running_pod

__all__ = ["find_running_pod"]
