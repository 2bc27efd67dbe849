"""
Endpoint Module - Black Box Interface

Purpose: Expose the driver pod through a cluster-internal Service
Interface: EndpointProvisioner.get_or_create_endpoint(), get_endpoint(), delete_endpoint()
Hidden: Service naming, V1Service construction, API status handling

Provisioning is idempotent per driver pod; retries belong to the caller.
"""

from .endpoint import EndpointProvisioner

__all__ = ["EndpointProvisioner"]
