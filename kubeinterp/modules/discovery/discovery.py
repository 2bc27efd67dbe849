import logging
from typing import Any, Optional

from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ...config.provider import INTERPRETER_PROCESS_ID
from ..api.models import PodRef

logger = logging.getLogger("kubeinterp.discovery")


def find_running_pod(
    api: Any,
    namespace: str,
    label: str,
    name_prefix: str,
    label_key: str = INTERPRETER_PROCESS_ID,
) -> Optional[PodRef]:
    """
    Find the driver pod tagged with this process's label.

    Args:
        api: CoreV1Api-compatible client
        namespace: Namespace to search
        label: Value of the process id label
        name_prefix: Expected prefix of the driver pod name
        label_key: Label key carrying the process id

    Returns:
        First pod whose name starts with name_prefix and whose phase is
        Running, or None if there is none or the list call failed
    """
    try:
        pods = api.list_namespaced_pod(
            namespace, label_selector=f"{label_key}={label}"
        ).items
    except (ApiException, HTTPError) as e:
        logger.error(f"Failed to list pods with {label_key}={label} in {namespace}: {e}")
        return None

    if not pods:
        logger.debug("Pod not found!")
        return None

    for raw_pod in pods:
        pod = PodRef.from_v1_pod(raw_pod)
        if pod.name and pod.name.startswith(name_prefix):
            logger.debug(f"Driver pod found. Status: {pod.phase}")
            if pod.is_running:
                return pod

    return None
