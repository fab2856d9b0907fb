"""SSH service for executing RouterOS commands on the appliance."""

import subprocess
import time
from typing import Optional

from letsencrypt_routeros.exceptions import SSHError
from letsencrypt_routeros.logger import ProvisionLogger
from letsencrypt_routeros.models.operations import RemoteOperation
from letsencrypt_routeros.models.results import SSHResult
from letsencrypt_routeros.models.ssh import SSHConnection
from letsencrypt_routeros.services.executor import RemoteExecutor


class SSHService(RemoteExecutor):
    """Service for SSH and SCP operations against a single appliance."""

    def __init__(self, connection: SSHConnection, logger: Optional[ProvisionLogger] = None):
        """
        Initialize SSH service.

        Args:
            connection: SSH connection details for the appliance
            logger: Optional logger that receives commands and their output
        """
        self.connection = connection
        self.logger = logger

    def execute(self, operation: RemoteOperation) -> SSHResult:
        """
        Execute a RouterOS operation via SSH.

        Args:
            operation: Operation to run

        Returns:
            SSHResult with execution details
        """
        return self._run(
            self.connection.build_command(operation.command),
            operation.command,
            operation.description,
        )

    def upload(self, local_path: str, remote_file: str) -> SSHResult:
        """
        Copy a local file to the appliance via SCP.

        Args:
            local_path: File on this machine
            remote_file: Name of the file on the appliance

        Returns:
            SSHResult with execution details
        """
        return self._run(
            self.connection.build_copy_command(local_path, remote_file),
            f"scp {local_path} -> {remote_file}",
            "upload file",
        )

    def _run(self, argv: list[str], command: str, action: str) -> SSHResult:
        if self.logger:
            self.logger.log_command(" ".join(argv))

        start_time = time.time()

        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as e:
            raise SSHError(
                f"Could not run {argv[0]}: {e}",
                context=f"Host: {self.connection.host}, Action: {action}, Command: {command}",
            ) from e

        duration = time.time() - start_time

        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")

        return SSHResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            host=self.connection.host,
            command=command,
            duration_seconds=duration,
        )
