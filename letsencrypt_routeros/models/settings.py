"""
Settings Models

The resolved, immutable configuration for one provisioning run.
"""

from dataclasses import dataclass, field
from enum import Enum

from letsencrypt_routeros.constants import (
    DEFAULT_SERVICES,
    REMOTE_CERTIFICATE_TEMPLATE,
    REMOTE_KEY_TEMPLATE,
    STORE_NAME_SUFFIX,
)
from letsencrypt_routeros.models.ssh import SSHConfig, SSHConnection


class ArtifactKind(Enum):
    """What an uploaded file is."""

    CERTIFICATE = "certificate"
    KEY = "key"


@dataclass(frozen=True)
class Artifact:
    """A local file that is uploaded, imported, and then removed remotely."""

    kind: ArtifactKind
    local_path: str
    remote_file: str
    store_name: str

    @property
    def label(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class Settings:
    """Fully resolved settings. Build with ConfigService.resolve()."""

    user: str
    host: str
    port: str
    private_key: str
    domain: str
    certificate: str
    key: str
    ssh_options: str = ""
    services: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_SERVICES))

    @property
    def ssh_config(self) -> SSHConfig:
        return SSHConfig(key_path=self.private_key, user=self.user, options=self.ssh_options)

    @property
    def connection(self) -> SSHConnection:
        return SSHConnection(host=self.host, config=self.ssh_config, port=self.port)

    @property
    def certificate_artifact(self) -> Artifact:
        remote_file = REMOTE_CERTIFICATE_TEMPLATE.format(domain=self.domain)
        return Artifact(
            kind=ArtifactKind.CERTIFICATE,
            local_path=self.certificate,
            remote_file=remote_file,
            store_name=remote_file + STORE_NAME_SUFFIX,
        )

    @property
    def key_artifact(self) -> Artifact:
        remote_file = REMOTE_KEY_TEMPLATE.format(domain=self.domain)
        return Artifact(
            kind=ArtifactKind.KEY,
            local_path=self.key,
            remote_file=remote_file,
            store_name=remote_file + STORE_NAME_SUFFIX,
        )

    def __repr__(self) -> str:
        return (
            f"Settings(user={self.user}, host={self.host}, port={self.port}, "
            f"domain={self.domain})"
        )
