"""
Process Factory following Black Box Design principles.

Composition root that turns configuration into a ready-to-start
SparkK8sRemoteProcess.
"""

import logging
from typing import Optional

from ...config.provider import ConfigProvider
from ...logging_config import configure_logging
from ..cluster import ClusterClientHandle
from .process import SparkK8sRemoteProcess

logger = logging.getLogger(__name__)


class ProcessFactory:
    """Factory for remote interpreter processes."""

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        group_name: str,
        group_id: str,
        cluster_client: Optional[ClusterClientHandle] = None,
    ) -> SparkK8sRemoteProcess:
        """
        Build a remote process from configuration and apply its logging setup.

        Args:
            config_provider: Configuration provider
            group_name: Interpreter group name, e.g. "spark"
            group_id: Interpreter group id the labels are derived from
            cluster_client: Optional pre-built client handle

        Returns:
            SparkK8sRemoteProcess, not yet started
        """
        cluster_config = config_provider.get_cluster_config()
        launcher_config = config_provider.get_launcher_config()
        configure_logging(launcher_config.log_level)

        process = SparkK8sRemoteProcess(
            runner=launcher_config.runner,
            interpreter_dir=launcher_config.interpreter_dir,
            local_repo_dir=launcher_config.local_repo_dir,
            env=launcher_config.env,
            connect_timeout=launcher_config.connect_timeout_ms,
            group_name=group_name,
            group_id=group_id,
            cluster_config=cluster_config,
            cluster_client=cluster_client,
        )
        logger.info(
            f"Built remote process for group {group_name} "
            f"(label {process.identity.process_label}, namespace {cluster_config.namespace})"
        )
        return process
