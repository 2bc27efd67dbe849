"""
API Module - Black Box Interface

Purpose: Shared data models and error types
Interface: Pydantic models, enums and exceptions used across modules
Hidden: Conversion from raw Kubernetes client objects

Every other module exchanges data through these types only.
"""

from .exceptions import (
    ClusterUnreachable,
    EndpointProvisionError,
    KubeInterpError,
    StartupTimeout,
)
from .models import (
    EndpointService,
    PodPhase,
    PodRef,
    PollerState,
    PollResult,
    ProbeOutcome,
    ProbeResult,
    TeardownResult,
    TeardownStatus,
    WorkerIdentity,
    WorkerProcessState,
)

__all__ = [
    "KubeInterpError",
    "ClusterUnreachable",
    "EndpointProvisionError",
    "StartupTimeout",
    "WorkerIdentity",
    "PodPhase",
    "PodRef",
    "EndpointService",
    "WorkerProcessState",
    "ProbeOutcome",
    "ProbeResult",
    "PollerState",
    "PollResult",
    "TeardownStatus",
    "TeardownResult",
]
