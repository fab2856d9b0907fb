"""
Result Models

Dataclass models for remote command results and run reports.
"""

from dataclasses import dataclass, field
from enum import Enum


class ProvisionState(Enum):
    """Where a provisioning run currently is."""

    CONFIGURING = "configuring"
    VERIFYING_LOCAL = "verifying-local"
    PROBING_SESSION = "probing-session"
    PRE_CLEANUP = "pre-cleanup"
    TRANSFERRING_CERT = "transferring-cert"
    TRANSFERRING_KEY = "transferring-key"
    CONFIGURING_SERVICES = "configuring-services"
    POST_CLEANUP = "post-cleanup"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SSHResult:
    """Result of an SSH or SCP command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    host: str = ""
    command: str = ""
    duration_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if SSH command succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if SSH command failed."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"SSHResult(host={self.host}, returncode={self.returncode}, duration={self.duration_seconds:.2f}s)"


@dataclass
class ProvisionReport:
    """Summary of a finished provisioning run."""

    host: str
    domain: str
    state: ProvisionState = ProvisionState.CONFIGURING
    certificate_store_name: str = ""
    key_store_name: str = ""
    services: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.state == ProvisionState.DONE

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "domain": self.domain,
            "state": self.state.value,
            "certificate": self.certificate_store_name,
            "key": self.key_store_name,
            "services": list(self.services),
            "warnings": list(self.warnings),
        }
