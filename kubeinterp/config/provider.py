"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

# In-cluster control plane address
K8S_MASTER_URL = "https://kubernetes:443"
KUBERNETES_NAMESPACE = "default"

DRIVER_POD_NAME_PREFIX = "zri-"
DRIVER_SERVICE_NAME_SUFFIX = "-ri-svc"
SPARK_APP_SELECTOR = "spark-app-selector"
INTERPRETER_PROCESS_ID = "interpreter-processId"

REMOTE_INTERPRETER_PORT = 30000
POLL_INTERVAL_SECONDS = 0.5


@dataclass(frozen=True)
class ClusterConfig:
    """Kubernetes placement settings. Fixed, not read from the environment."""
    master_url: str = K8S_MASTER_URL
    namespace: str = KUBERNETES_NAMESPACE
    pod_name_prefix: str = DRIVER_POD_NAME_PREFIX
    service_suffix: str = DRIVER_SERVICE_NAME_SUFFIX
    selector_label: str = SPARK_APP_SELECTOR
    process_id_label: str = INTERPRETER_PROCESS_ID
    port: int = REMOTE_INTERPRETER_PORT
    poll_interval: float = POLL_INTERVAL_SECONDS


@dataclass
class LauncherConfig:
    """Local runner configuration."""
    runner: str
    interpreter_dir: str
    local_repo_dir: str
    connect_timeout_ms: int
    env: Dict[str, str]
    log_level: str = "INFO"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_cluster_config(self) -> ClusterConfig:
        """Get Kubernetes placement configuration."""
        ...

    def get_launcher_config(self) -> LauncherConfig:
        """Get local runner configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    ENV_PREFIX = "KUBEINTERP_"

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get_cluster_config(self) -> ClusterConfig:
        """Cluster settings are constants."""
        return ClusterConfig()

    def get_launcher_config(self) -> LauncherConfig:
        """Get runner configuration from environment variables."""
        runner = self._environ.get("KUBEINTERP_RUNNER")
        if not runner:
            raise ValueError(
                "KUBEINTERP_RUNNER environment variable is required. "
                "Point it at the interpreter launch script, e.g. bin/interpreter.sh"
            )

        timeout_env = self._environ.get("KUBEINTERP_CONNECT_TIMEOUT_MS", "30000")
        try:
            connect_timeout_ms = int(timeout_env)
        except ValueError:
            raise ValueError(
                f"KUBEINTERP_CONNECT_TIMEOUT_MS must be an integer, got {timeout_env!r}"
            )
        if connect_timeout_ms <= 0:
            raise ValueError("KUBEINTERP_CONNECT_TIMEOUT_MS must be positive")

        # Pass through KUBEINTERP_ENV_* to the runner with the prefix stripped
        env_prefix = f"{self.ENV_PREFIX}ENV_"
        runner_env = {
            key[len(env_prefix):]: value
            for key, value in self._environ.items()
            if key.startswith(env_prefix) and len(key) > len(env_prefix)
        }

        return LauncherConfig(
            runner=runner,
            interpreter_dir=self._environ.get("KUBEINTERP_INTERPRETER_DIR", "interpreter/spark"),
            local_repo_dir=self._environ.get("KUBEINTERP_LOCAL_REPO", "local-repo"),
            connect_timeout_ms=connect_timeout_ms,
            env=runner_env,
            log_level=self._environ.get("LOG_LEVEL", "INFO").upper(),
        )
