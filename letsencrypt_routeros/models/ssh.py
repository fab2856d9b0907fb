"""
SSH Configuration Models

Dataclass models for the administrative SSH channel.
"""

import shlex
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SSHConfig:
    """SSH configuration for logging in to the appliance."""

    key_path: str
    user: str
    options: str = ""

    @property
    def key_path_expanded(self) -> Path:
        """Get expanded key path (resolves ~)."""
        return Path(self.key_path).expanduser()

    @property
    def extra_options(self) -> list[str]:
        """Split the free-form options string the way a shell would."""
        return shlex.split(self.options) if self.options else []

    def __repr__(self) -> str:
        return f"SSHConfig(user={self.user}, key={self.key_path})"


@dataclass(frozen=True)
class SSHConnection:
    """SSH connection details for the appliance."""

    host: str
    config: SSHConfig
    port: str = "22"

    @property
    def connection_string(self) -> str:
        """Get SSH connection string (user@host)."""
        return f"{self.config.user}@{self.host}"

    @property
    def ssh_command_prefix(self) -> list[str]:
        """Get SSH command prefix for subprocess."""
        return [
            "ssh",
            "-i",
            str(self.config.key_path_expanded),
            "-p",
            self.port,
            *self.config.extra_options,
            self.connection_string,
        ]

    def build_command(self, remote_command: str) -> list[str]:
        """Build full SSH command with remote command."""
        return self.ssh_command_prefix + [remote_command]

    def build_copy_command(self, local_path: str, remote_file: str) -> list[str]:
        """Build scp command that places local_path at remote_file."""
        return [
            "scp",
            "-q",
            "-P",
            self.port,
            "-i",
            str(self.config.key_path_expanded),
            *self.config.extra_options,
            local_path,
            f"{self.connection_string}:{remote_file}",
        ]

    def __repr__(self) -> str:
        return f"SSHConnection(host={self.host}, port={self.port}, user={self.config.user})"
