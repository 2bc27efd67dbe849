"""
kubeinterp shared data models.

These models define the structure of all data passed between
components of the remote process lifecycle.
"""

import re
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Enums


class PodPhase(str, Enum):
    """Kubernetes pod lifecycle phase."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class ProbeOutcome(str, Enum):
    """Result of a single readiness probe."""

    READY = "ready"
    NOT_YET_READY = "not_yet_ready"
    CLUSTER_ERROR = "cluster_error"


class PollerState(str, Enum):
    """States of the readiness poller."""

    STARTING = "starting"
    PROBING = "probing"
    READY = "ready"
    TIMED_OUT = "timed_out"


class TeardownStatus(str, Enum):
    """Outcome of deleting the driver Service."""

    SKIPPED = "skipped"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FAILED = "failed"


LABEL_PATTERN = re.compile(r"^[a-z0-9_]*$")


# Identity


class WorkerIdentity(BaseModel):
    """Labels identifying one remote worker, fixed at construction."""

    model_config = ConfigDict(frozen=True)

    group_label: str = Field(..., description="Sanitized interpreter group id", max_length=49)
    process_label: str = Field(
        ..., description="Sanitized group id plus creation timestamp", max_length=63
    )

    @field_validator("group_label", "process_label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        """Labels must already be sanitized."""
        if not LABEL_PATTERN.match(v):
            raise ValueError(f"Label contains characters outside [a-z0-9_]: {v!r}")
        return v


# Cluster snapshots


class PodRef(BaseModel):
    """Read-only snapshot of a pod taken at query time."""

    name: str
    phase: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_running(self) -> bool:
        return bool(self.phase) and self.phase.lower() == PodPhase.RUNNING.value.lower()

    @classmethod
    def from_v1_pod(cls, pod: Any) -> "PodRef":
        """Build from a kubernetes.client.V1Pod."""
        metadata = pod.metadata
        status = pod.status
        return cls(
            name=metadata.name or "",
            phase=status.phase if status is not None else None,
            labels=dict(metadata.labels or {}),
        )


class EndpointService(BaseModel):
    """Cluster-internal Service exposing the driver pod."""

    name: str
    namespace: str
    cluster_ip: Optional[str] = Field(None, description="Address assigned by the cluster")
    port: int = Field(..., ge=1, le=65535)
    selector: Dict[str, str] = Field(default_factory=dict)

    @property
    def host(self) -> Optional[str]:
        """Cluster IP usable as a host, None for headless or unassigned."""
        if not self.cluster_ip or self.cluster_ip == "None":
            return None
        return self.cluster_ip

    @classmethod
    def from_v1_service(cls, service: Any) -> "EndpointService":
        """Build from a kubernetes.client.V1Service."""
        spec = service.spec
        ports = spec.ports or []
        return cls(
            name=service.metadata.name,
            namespace=service.metadata.namespace or "",
            cluster_ip=spec.cluster_ip,
            port=ports[0].port if ports else 0,
            selector=dict(spec.selector or {}),
        )


# Process state


class WorkerProcessState(BaseModel):
    """Externally visible state of a remote process."""

    running: bool = False
    host: Optional[str] = None
    port: int


# Poll results


class ProbeResult(BaseModel):
    """Outcome of one readiness probe."""

    outcome: ProbeOutcome
    host: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ready(cls, host: str) -> "ProbeResult":
        return cls(outcome=ProbeOutcome.READY, host=host)

    @classmethod
    def not_yet_ready(cls, host: Optional[str] = None) -> "ProbeResult":
        return cls(outcome=ProbeOutcome.NOT_YET_READY, host=host)

    @classmethod
    def cluster_error(cls, error: str) -> "ProbeResult":
        return cls(outcome=ProbeOutcome.CLUSTER_ERROR, error=error)


class PollResult(BaseModel):
    """Terminal result of the readiness poller."""

    state: PollerState
    host: Optional[str] = None
    attempts: int = 0
    elapsed: float = Field(0.0, description="Seconds spent polling")
    last_error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.state == PollerState.READY


class TeardownResult(BaseModel):
    """Outcome of a best-effort teardown."""

    status: TeardownStatus
    service_name: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != TeardownStatus.FAILED
