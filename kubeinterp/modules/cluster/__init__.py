"""
Cluster Module - Black Box Interface

Purpose: Own the connection to the Kubernetes control plane
Interface: ClusterClientHandle.get_or_create(), close()
Hidden: kubernetes client configuration, connection pooling

At most one live client per handle; closing makes the next use reconnect.
"""

from .client import ClusterClientHandle

__all__ = ["ClusterClientHandle"]
