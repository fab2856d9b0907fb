"""
letsencrypt-routeros Domain Models

Dataclass-based models for settings, remote operations, and results.
"""

from .results import (
    ProvisionReport,
    ProvisionState,
    SSHResult,
)
from .settings import (
    Artifact,
    ArtifactKind,
    Settings,
)
from .ssh import (
    SSHConfig,
    SSHConnection,
)
from .operations import (
    RemoteOperation,
    ProbeSystem,
    RemoveCertificate,
    RemoveFile,
    ImportFile,
    BindTLSService,
    BindTunnelServer,
)

__all__ = [
    # Results
    "ProvisionReport",
    "ProvisionState",
    "SSHResult",
    # Settings
    "Artifact",
    "ArtifactKind",
    "Settings",
    # SSH
    "SSHConfig",
    "SSHConnection",
    # Operations
    "RemoteOperation",
    "ProbeSystem",
    "RemoveCertificate",
    "RemoveFile",
    "ImportFile",
    "BindTLSService",
    "BindTunnelServer",
]
