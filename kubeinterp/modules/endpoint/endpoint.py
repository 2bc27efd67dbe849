import logging
from typing import Any, Optional

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from pydantic import ValidationError
from urllib3.exceptions import HTTPError

from ...config.provider import (
    DRIVER_SERVICE_NAME_SUFFIX,
    KUBERNETES_NAMESPACE,
    REMOTE_INTERPRETER_PORT,
    SPARK_APP_SELECTOR,
)
from ..api.exceptions import ClusterUnreachable, EndpointProvisionError
from ..api.models import EndpointService, PodRef

logger = logging.getLogger("kubeinterp.endpoint")


class EndpointProvisioner:
    """
    Creates and deletes the Service fronting a RemoteInterpreterServer.

    The Service name is derived from the driver pod name, so provisioning
    the same pod twice finds the existing Service instead of creating another.
    """

    def __init__(
        self,
        namespace: str = KUBERNETES_NAMESPACE,
        port: int = REMOTE_INTERPRETER_PORT,
        selector_label: str = SPARK_APP_SELECTOR,
        suffix: str = DRIVER_SERVICE_NAME_SUFFIX,
    ):
        self.namespace = namespace
        self.port = port
        self.selector_label = selector_label
        self.suffix = suffix

    def service_name_for(self, pod_name: str) -> str:
        return pod_name + self.suffix

    def get_endpoint(self, api: Any, service_name: str) -> Optional[EndpointService]:
        """
        Look up an existing Service.

        Returns:
            The Service, or None if it does not exist

        Raises:
            EndpointProvisionError: On API errors other than 404
            ClusterUnreachable: On transport failures
        """
        logger.debug(f"Check if RemoteInterpreterServer service {service_name} exists")
        try:
            service = api.read_namespaced_service(service_name, self.namespace)
        except ApiException as e:
            if e.status == 404:
                return None
            raise EndpointProvisionError(
                f"Failed to read service {service_name}: {e.status} {e.reason}"
            ) from e
        except HTTPError as e:
            raise ClusterUnreachable(f"Failed to read service {service_name}: {e}") from e
        return self._to_endpoint(service)

    def get_or_create_endpoint(self, api: Any, pod: PodRef) -> EndpointService:
        """
        Return the Service for pod, creating it if absent.

        Args:
            api: CoreV1Api-compatible client
            pod: Running driver pod

        Returns:
            EndpointService carrying the cluster-assigned address

        Raises:
            EndpointProvisionError: If the pod has no selector label or the API rejects the Service
            ClusterUnreachable: On transport failures
        """
        service_name = self.service_name_for(pod.name)
        endpoint = self.get_endpoint(api, service_name)
        if endpoint is not None:
            return endpoint

        selector_value = pod.labels.get(self.selector_label)
        if not selector_value:
            raise EndpointProvisionError(
                f"Pod {pod.name} has no {self.selector_label} label to select on"
            )

        logger.info(
            f"Create RemoteInterpreterServer service for {self.selector_label}: {selector_value}"
        )
        body = self._build_service(service_name, selector_value)
        try:
            created = api.create_namespaced_service(self.namespace, body)
        except ApiException as e:
            if e.status == 409:
                # Created concurrently; use whatever now exists
                logger.info(f"Service {service_name} already exists, reusing it")
                endpoint = self.get_endpoint(api, service_name)
                if endpoint is not None:
                    return endpoint
            raise EndpointProvisionError(
                f"Failed to create service {service_name}: {e.status} {e.reason}"
            ) from e
        except HTTPError as e:
            raise ClusterUnreachable(f"Failed to create service {service_name}: {e}") from e

        return self._to_endpoint(created)

    def delete_endpoint(self, api: Any, service_name: str) -> bool:
        """
        Delete a Service by name.

        Returns:
            True if deleted, False if it was already gone

        Raises:
            EndpointProvisionError: On API errors other than 404
            ClusterUnreachable: On transport failures
        """
        try:
            api.delete_namespaced_service(service_name, self.namespace)
        except ApiException as e:
            if e.status == 404:
                return False
            raise EndpointProvisionError(
                f"Failed to delete service {service_name}: {e.status} {e.reason}"
            ) from e
        except HTTPError as e:
            raise ClusterUnreachable(f"Failed to delete service {service_name}: {e}") from e
        return True

    def _build_service(self, service_name: str, selector_value: str) -> client.V1Service:
        return client.V1Service(
            api_version="v1",
            kind="Service",
            metadata=client.V1ObjectMeta(name=service_name),
            spec=client.V1ServiceSpec(
                ports=[
                    client.V1ServicePort(
                        protocol="TCP",
                        port=self.port,
                        target_port=self.port,
                    )
                ],
                selector={self.selector_label: selector_value},
                type="ClusterIP",
            ),
        )

    def _to_endpoint(self, service: Any) -> EndpointService:
        try:
            return EndpointService.from_v1_service(service)
        except ValidationError as e:
            raise EndpointProvisionError(f"Malformed service returned by the API: {e}") from e
