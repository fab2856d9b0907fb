"""
letsencrypt-routeros Services Layer

Configuration resolution, SSH transport and the provisioning workflow.
"""

from .config_service import ConfigService
from .executor import RemoteExecutor
from .ssh_service import SSHService
from .provisioner import Provisioner

__all__ = [
    "ConfigService",
    "RemoteExecutor",
    "SSHService",
    "Provisioner",
]
