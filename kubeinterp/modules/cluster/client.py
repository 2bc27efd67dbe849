import logging
from typing import Any, Callable, Optional

from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.config.config_exception import ConfigException

from ...config.provider import K8S_MASTER_URL
from ..api.exceptions import ClusterUnreachable

logger = logging.getLogger("kubeinterp.cluster")


def build_core_api(master_url: str) -> client.CoreV1Api:
    """Create a CoreV1Api bound to master_url, using the pod service account when present."""
    configuration = client.Configuration()
    try:
        k8s_config.load_incluster_config(client_configuration=configuration)
    except ConfigException:
        logger.debug("No in-cluster service account found, connecting without credentials")
    configuration.host = master_url
    return client.CoreV1Api(client.ApiClient(configuration))


class ClusterClientHandle:
    """
    Lazily created Kubernetes client, one per remote process.

    The factory is injectable so tests can hand in a fake CoreV1Api.
    """

    def __init__(
        self,
        master_url: str = K8S_MASTER_URL,
        api_factory: Optional[Callable[[str], Any]] = None,
    ):
        self.master_url = master_url
        self._api_factory = api_factory or build_core_api
        self._api = None

    @property
    def is_open(self) -> bool:
        return self._api is not None

    def get_or_create(self) -> Any:
        """
        Return the live client, creating it on first use.

        Raises:
            ClusterUnreachable: If the client cannot be constructed
        """
        if self._api is None:
            logger.info(f"Connect to Kubernetes cluster at: {self.master_url}")
            try:
                api = self._api_factory(self.master_url)
            except Exception as e:
                raise ClusterUnreachable(
                    f"Cannot create Kubernetes client for {self.master_url}: {e}"
                ) from e
            self._api = api
        return self._api

    def close(self) -> None:
        """Release the client. Safe to call when no client exists."""
        api, self._api = self._api, None
        if api is None:
            return
        api_client = getattr(api, "api_client", None)
        if api_client is not None:
            api_client.close()
        logger.debug("Kubernetes client closed")
