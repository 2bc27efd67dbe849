"""
kubeinterp - Remote interpreters on Kubernetes

Launches an interpreter worker as a pod, waits until it is reachable and
exposes it through a cluster-internal Service.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- api: Shared data models and exceptions
- identity: Worker identity and label generation
- cluster: Kubernetes client handle lifecycle
- discovery: Driver pod lookup by label
- endpoint: Service provisioning for the driver pod
- poller: Readiness polling state machine
- launcher: Local runner process and reachability checks
- process: Spark-on-Kubernetes remote process (start/stop)
"""

__version__ = "1.0.0"
