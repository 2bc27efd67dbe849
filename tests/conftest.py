"""
Shared pytest fixtures for kubeinterp tests.

This module provides common fixtures including:
- FakeCoreV1Api: Stateful stand-in for the Kubernetes core API
- FakeClock: Clock whose sleep() advances time instantly
- ClusterClientHandle wired to the fake API
"""

import copy
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest
from kubernetes import client
from kubernetes.client.exceptions import ApiException

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kubeinterp.modules.cluster import ClusterClientHandle


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """Monotonic clock in seconds; sleep() moves it forward."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


# =============================================================================
# Kubernetes API Fake
# =============================================================================

@dataclass
class FakePod:
    """Pod definition; phase becomes Running once running_after is reached."""
    name: str
    labels: Dict[str, str]
    phase: str = "Running"
    namespace: str = "default"
    running_after: Optional[float] = None

    def to_v1_pod(self, now: float) -> client.V1Pod:
        phase = self.phase
        if self.running_after is not None:
            phase = "Running" if now >= self.running_after else "Pending"
        return client.V1Pod(
            metadata=client.V1ObjectMeta(
                name=self.name, namespace=self.namespace, labels=dict(self.labels)
            ),
            status=client.V1PodStatus(phase=phase),
        )


class FakeCoreV1Api:
    """
    In-memory CoreV1Api covering the calls kubeinterp makes.

    Every call is recorded in `calls` as (method, args) so tests can
    assert on how many round-trips happened.
    """

    def __init__(self, clock: Optional[FakeClock] = None):
        self.clock = clock or FakeClock()
        self.pods: List[FakePod] = []
        self.services: Dict[Tuple[str, str], client.V1Service] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self.created: List[str] = []
        self.deleted: List[str] = []
        self.list_error: Optional[Exception] = None
        self.create_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None
        self.api_client = MagicMock()
        self._next_ip = 1

    def add_pod(self, name: str, labels: Dict[str, str], **kwargs) -> FakePod:
        pod = FakePod(name=name, labels=labels, **kwargs)
        self.pods.append(pod)
        return pod

    def list_namespaced_pod(self, namespace, label_selector=None, **kwargs):
        self.calls.append(("list_namespaced_pod", (namespace, label_selector)))
        if self.list_error is not None:
            raise self.list_error

        wanted = {}
        if label_selector:
            for term in label_selector.split(","):
                key, _, value = term.partition("=")
                wanted[key] = value

        items = [
            pod.to_v1_pod(self.clock())
            for pod in self.pods
            if pod.namespace == namespace
            and all(pod.labels.get(k) == v for k, v in wanted.items())
        ]
        return client.V1PodList(items=items)

    def read_namespaced_service(self, name, namespace, **kwargs):
        self.calls.append(("read_namespaced_service", (name, namespace)))
        service = self.services.get((namespace, name))
        if service is None:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(service)

    def create_namespaced_service(self, namespace, body, **kwargs):
        self.calls.append(("create_namespaced_service", (namespace, body)))
        if self.create_error is not None:
            raise self.create_error

        name = body.metadata.name
        if (namespace, name) in self.services:
            raise ApiException(status=409, reason="AlreadyExists")

        service = copy.deepcopy(body)
        service.metadata.namespace = namespace
        service.spec.cluster_ip = f"10.96.0.{self._next_ip}"
        self._next_ip += 1
        self.services[(namespace, name)] = service
        self.created.append(name)
        return copy.deepcopy(service)

    def delete_namespaced_service(self, name, namespace, **kwargs):
        self.calls.append(("delete_namespaced_service", (name, namespace)))
        if self.delete_error is not None:
            raise self.delete_error
        if self.services.pop((namespace, name), None) is None:
            raise ApiException(status=404, reason="Not Found")
        self.deleted.append(name)
        return client.V1Status(status="Success")

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_clock():
    """Clock starting at 0.0 seconds."""
    return FakeClock()


@pytest.fixture
def fake_api(fake_clock):
    """Empty fake cluster sharing the fake clock."""
    return FakeCoreV1Api(fake_clock)


@pytest.fixture
def api_factory(fake_api):
    """Factory handing out the fake API, with call tracking."""
    return MagicMock(return_value=fake_api)


@pytest.fixture
def cluster_handle(api_factory):
    """ClusterClientHandle backed by the fake API."""
    return ClusterClientHandle(api_factory=api_factory)
