import logging
import os
import socket
import subprocess
from abc import ABC, abstractmethod
from threading import Thread
from typing import Dict, List, Optional

logger = logging.getLogger("kubeinterp.launcher")
runner_logger = logging.getLogger("kubeinterp.runner")


class RemoteProcessLauncher(ABC):
    """Base class for a managed remote interpreter process."""

    REACHABILITY_TIMEOUT = 1.0
    TERMINATE_TIMEOUT = 10

    def __init__(
        self,
        runner: str,
        interpreter_dir: str,
        local_repo_dir: str,
        env: Optional[Dict[str, str]],
        connect_timeout: int,
        group_name: str,
        port: int = -1,
    ):
        """
        Initialize launcher.

        Args:
            runner: Path of the interpreter launch script
            interpreter_dir: Interpreter installation directory
            local_repo_dir: Local dependency repository
            env: Extra environment for the runner
            connect_timeout: Milliseconds to wait for the interpreter
            group_name: Interpreter group name, e.g. "spark"
            port: Port the interpreter listens on
        """
        self.runner = runner
        self.interpreter_dir = interpreter_dir
        self.local_repo_dir = local_repo_dir
        self.env = dict(env or {})
        self._connect_timeout = connect_timeout
        self.group_name = group_name
        self.host: Optional[str] = None
        self.port = port
        self._running = False
        self._process: Optional[subprocess.Popen] = None

    @property
    def connect_timeout(self) -> int:
        return self._connect_timeout

    @property
    def running(self) -> bool:
        return self._running

    def set_running(self, value: bool) -> None:
        self._running = value

    @abstractmethod
    def start(self, user_name: str = "anonymous", impersonate: bool = False) -> None:
        """Launch the interpreter and block until it is reachable."""

    def execute_command(self, cmd: List[str]) -> subprocess.Popen:
        """
        Start the runner without waiting for it.

        Output is forwarded line by line to the kubeinterp.runner logger.

        Args:
            cmd: Command line, runner first

        Returns:
            The started process
        """
        logger.info(f"Run interpreter process {cmd}")
        process_env = dict(os.environ)
        process_env.update(self.env)

        self._process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=process_env,
            text=True,
        )
        Thread(target=self._drain_output, args=(self._process,), daemon=True).start()
        return self._process

    def _drain_output(self, process: subprocess.Popen) -> None:
        for line in process.stdout:
            runner_logger.info(line.rstrip())
        logger.debug(f"Interpreter runner exited with {process.wait()}")

    def is_reachable(self, host: str, port: int) -> bool:
        """Check if a TCP connection to host:port succeeds."""
        try:
            with socket.create_connection((host, port), timeout=self.REACHABILITY_TIMEOUT):
                return True
        except OSError:
            return False

    def stop(self):
        """Stop the endpoint, then the runner process."""
        result = self._stop_endpoint()
        self._stop_runner()
        self.set_running(False)
        return result

    def _stop_endpoint(self):
        """Release whatever exposes the interpreter. Nothing by default."""
        return None

    def _stop_runner(self) -> None:
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        logger.info("Terminating interpreter runner")
        process.terminate()
        try:
            process.wait(timeout=self.TERMINATE_TIMEOUT)
        except subprocess.TimeoutExpired:
            logger.warning("Interpreter runner did not exit, killing it")
            process.kill()
            process.wait()
