"""Remote executor interface shared by the SSH service and test doubles."""

from abc import ABC, abstractmethod

from letsencrypt_routeros.models.operations import RemoteOperation
from letsencrypt_routeros.models.results import SSHResult


class RemoteExecutor(ABC):
    """Runs RouterOS operations and file uploads against one appliance."""

    @abstractmethod
    def execute(self, operation: RemoteOperation) -> SSHResult:
        """
        Run one remote operation.

        Returns the result for any exit status. Raises SSHError only when
        the transport itself cannot be started.
        """

    @abstractmethod
    def upload(self, local_path: str, remote_file: str) -> SSHResult:
        """Copy a local file to the appliance under remote_file."""
