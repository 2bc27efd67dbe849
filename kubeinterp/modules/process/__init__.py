"""
Process Module - Black Box Interface

Purpose: Start and stop a Spark remote interpreter running on Kubernetes
Interface: SparkK8sRemoteProcess.start(), stop(), obtain_endpoint_host(); ProcessFactory.build()
Hidden: Pod discovery, Service provisioning, readiness polling, client lifetime

start() either returns with running=True and a host, or raises StartupTimeout.
"""

from .factory import ProcessFactory
from .process import SparkK8sRemoteProcess

__all__ = ["SparkK8sRemoteProcess", "ProcessFactory"]
