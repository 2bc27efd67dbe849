"""
Identity Module - Black Box Interface

Purpose: Derive cluster-safe labels for a remote worker
Interface: format_id(), derive_pod_label(), create_identity()
Hidden: Sanitization rules, timestamp source

Labels are unique only as far as the millisecond timestamp makes them.
"""

from .identity import create_identity, derive_pod_label, format_id

__all__ = ["format_id", "derive_pod_label", "create_identity"]
