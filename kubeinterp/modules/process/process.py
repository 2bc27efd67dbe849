"""
Spark remote interpreter on Kubernetes.

spark-submit starts the driver as a pod. Once that pod is Running, a
ClusterIP Service is created in front of the RemoteInterpreterServer it
hosts, and the Service's cluster IP becomes the interpreter host.
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from ...config.provider import ClusterConfig
from ..api.exceptions import ClusterUnreachable, EndpointProvisionError, StartupTimeout
from ..api.models import (
    EndpointService,
    ProbeResult,
    TeardownResult,
    TeardownStatus,
    WorkerProcessState,
)
from ..cluster import ClusterClientHandle
from ..discovery import find_running_pod
from ..endpoint import EndpointProvisioner
from ..identity import create_identity
from ..launcher import RemoteProcessLauncher
from ..poller import ReadinessPoller

logger = logging.getLogger("kubeinterp.process")


class SparkK8sRemoteProcess(RemoteProcessLauncher):
    """
    Manages start/stop of a Spark remote interpreter on a Kubernetes cluster.

    Not safe for concurrent start/stop on the same instance.
    """

    def __init__(
        self,
        runner: str,
        interpreter_dir: str,
        local_repo_dir: str,
        env: Optional[Dict[str, str]],
        connect_timeout: int,
        group_name: str,
        group_id: str,
        cluster_config: Optional[ClusterConfig] = None,
        cluster_client: Optional[ClusterClientHandle] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cluster_config = cluster_config or ClusterConfig()
        super().__init__(
            runner,
            interpreter_dir,
            local_repo_dir,
            env,
            connect_timeout,
            group_name,
            port=self.cluster_config.port,
        )
        self.identity = create_identity(group_id)
        self.cluster_client = cluster_client or ClusterClientHandle(self.cluster_config.master_url)
        self.provisioner = EndpointProvisioner(
            namespace=self.cluster_config.namespace,
            port=self.cluster_config.port,
            selector_label=self.cluster_config.selector_label,
            suffix=self.cluster_config.service_suffix,
        )
        self._clock = clock
        self._sleep = sleep
        self._driver_pod_name: Optional[str] = None
        self._endpoint: Optional[EndpointService] = None

    @property
    def driver_pod_prefix(self) -> str:
        return self.cluster_config.pod_name_prefix + self.group_name

    @property
    def endpoint(self) -> Optional[EndpointService]:
        return self._endpoint

    @property
    def state(self) -> WorkerProcessState:
        return WorkerProcessState(running=self.running, host=self.host, port=self.port)

    def build_command(self, user_name: str = "anonymous", impersonate: bool = False) -> List[str]:
        """
        Build the runner command line.

        Args:
            user_name: User to run the interpreter as
            impersonate: Pass the user through with -u

        Returns:
            Argument list starting with the runner
        """
        cmd = [
            self.runner,
            "-d", self.interpreter_dir,
            "-p", str(self.port),
        ]
        if impersonate and user_name != "anonymous":
            cmd += ["-u", user_name]
        cmd += [
            "-l", self.local_repo_dir,
            "-g", self.group_name,
            "-i", self.identity.group_label,
            "-t", self.identity.process_label,
        ]
        return cmd

    def start(self, user_name: str = "anonymous", impersonate: bool = False) -> None:
        """
        Launch the driver and wait for its interpreter to become reachable.

        Raises:
            StartupTimeout: If it is not reachable within connect_timeout
        """
        self.execute_command(self.build_command(user_name, impersonate))

        poller = ReadinessPoller(
            self._probe,
            self.connect_timeout,
            poll_interval=self.cluster_config.poll_interval,
            clock=self._clock,
            sleep=self._sleep,
        )
        result = poller.poll()

        if not result.is_ready:
            self._close_client()
            raise StartupTimeout(
                f"Unable to start {self.__class__.__name__}",
                attempts=result.attempts,
                elapsed=result.elapsed,
            )

        self.host = result.host
        self.set_running(True)

    def obtain_endpoint_host(self) -> Optional[str]:
        """
        Address the interpreter can be reached at, provisioning the Service if needed.

        Returns:
            Cluster IP of the driver Service, or None if not available yet
        """
        try:
            return self._resolve_endpoint_host()
        except (ClusterUnreachable, EndpointProvisionError) as e:
            logger.error(str(e))
            return None

    def _resolve_endpoint_host(self) -> Optional[str]:
        api = self.cluster_client.get_or_create()
        driver_pod = find_running_pod(
            api,
            self.cluster_config.namespace,
            self.identity.process_label,
            self.driver_pod_prefix,
            label_key=self.cluster_config.process_id_label,
        )
        if driver_pod is None:
            return None

        self._driver_pod_name = driver_pod.name
        logger.debug(f"Driver pod name: {driver_pod.name}")
        self._endpoint = self.provisioner.get_or_create_endpoint(api, driver_pod)
        logger.info(f"ClusterIP {self._endpoint.cluster_ip}")
        return self._endpoint.host

    def _probe(self) -> ProbeResult:
        try:
            host = self._resolve_endpoint_host()
        except (ClusterUnreachable, EndpointProvisionError) as e:
            logger.debug(f"Endpoint not resolved: {e}")
            return ProbeResult.cluster_error(str(e))

        if host is None:
            return ProbeResult.not_yet_ready()

        try:
            reachable = self.is_reachable(host, self.port)
        except Exception as e:
            logger.debug(f"Remote interpreter not yet accessible at {host}:{self.port}: {e}")
            return ProbeResult.not_yet_ready(host)

        if reachable:
            return ProbeResult.ready(host)
        return ProbeResult.not_yet_ready(host)

    def _stop_endpoint(self) -> TeardownResult:
        """
        Delete the driver Service. Best effort, never raises.

        Returns:
            TeardownResult describing what happened
        """
        if self._driver_pod_name is None:
            return TeardownResult(status=TeardownStatus.SKIPPED)

        if self._endpoint is not None:
            service_name = self._endpoint.name
        else:
            service_name = self.provisioner.service_name_for(self._driver_pod_name)

        try:
            api = self.cluster_client.get_or_create()
            deleted = self.provisioner.delete_endpoint(api, service_name)
            status = TeardownStatus.DELETED if deleted else TeardownStatus.NOT_FOUND
            logger.info(f"Delete RemoteInterpreterServer service {service_name} : {deleted}")
            result = TeardownResult(status=status, service_name=service_name)
        except (ClusterUnreachable, EndpointProvisionError) as e:
            logger.error(f"Failed to delete service {service_name}: {e}")
            result = TeardownResult(
                status=TeardownStatus.FAILED, service_name=service_name, error=str(e)
            )
        finally:
            self._close_client()

        if result.ok:
            self._driver_pod_name = None
            self._endpoint = None
        return result

    def _close_client(self) -> None:
        try:
            self.cluster_client.close()
        except Exception as e:
            logger.warning(f"Error closing Kubernetes client: {e}")
