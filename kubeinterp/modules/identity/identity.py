import re
import time
from typing import Callable, Optional

from ..api.models import WorkerIdentity

GROUP_LABEL_MAX_LENGTH = 50
PROCESS_LABEL_MAX_LENGTH = 64

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def current_millis() -> int:
    return int(time.time() * 1000)


def format_id(value: str, max_length: int) -> str:
    """
    Make an id safe for spark-submit and Kubernetes labels.

    Every character outside [A-Za-z0-9] becomes "_", the result is
    lower-cased, and ids reaching max_length are cut to max_length - 1
    characters.

    Args:
        value: Raw id
        max_length: Exclusive upper bound on the result length

    Returns:
        Sanitized id
    """
    value = _UNSAFE_CHARS.sub("_", value).lower()
    if len(value) >= max_length:
        value = value[: max_length - 1]
    return value


def derive_pod_label(group_id: str, now_millis: Optional[int] = None) -> str:
    """Label tagging the driver pod of one process instance."""
    if now_millis is None:
        now_millis = current_millis()
    return format_id(f"{group_id}_{now_millis}", PROCESS_LABEL_MAX_LENGTH)


def create_identity(
    group_id: str, clock: Callable[[], int] = current_millis
) -> WorkerIdentity:
    """
    Build the identity of a new remote worker.

    Args:
        group_id: Human-provided interpreter group id
        clock: Millisecond clock, read once

    Returns:
        WorkerIdentity with sanitized group and process labels
    """
    return WorkerIdentity(
        group_label=format_id(group_id, GROUP_LABEL_MAX_LENGTH),
        process_label=derive_pod_label(group_id, clock()),
    )
