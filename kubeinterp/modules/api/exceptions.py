"""Error types raised across kubeinterp modules."""


class KubeInterpError(Exception):
    """Base class for all kubeinterp errors."""


class ClusterUnreachable(KubeInterpError):
    """The Kubernetes control plane could not be reached."""


class EndpointProvisionError(KubeInterpError):
    """Looking up, creating or deleting the driver Service failed."""


class StartupTimeout(KubeInterpError, RuntimeError):
    """The remote process did not become reachable within the connect timeout."""

    def __init__(self, message: str, attempts: int = 0, elapsed: float = 0.0):
        super().__init__(message)
        self.attempts = attempts
        self.elapsed = elapsed
