"""
Remote Operation Models

The closed set of commands we send to RouterOS. Each operation renders
its own command line; executors never build command strings themselves.
"""

from dataclasses import dataclass

from letsencrypt_routeros.constants import (
    ROUTEROS_BIND_SERVICE_COMMAND,
    ROUTEROS_BIND_SSTP_COMMAND,
    ROUTEROS_IMPORT_COMMAND,
    ROUTEROS_PROBE_COMMAND,
    ROUTEROS_REMOVE_CERTIFICATE_COMMAND,
    ROUTEROS_REMOVE_FILE_COMMAND,
)


class RemoteOperation:
    """Base class for RouterOS commands."""

    description = "remote command"

    @property
    def command(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ProbeSystem(RemoteOperation):
    description = "query system resources"

    @property
    def command(self) -> str:
        return ROUTEROS_PROBE_COMMAND


@dataclass(frozen=True)
class RemoveCertificate(RemoteOperation):
    store_name: str
    description = "remove certificate"

    @property
    def command(self) -> str:
        return ROUTEROS_REMOVE_CERTIFICATE_COMMAND.format(store_name=self.store_name)


@dataclass(frozen=True)
class RemoveFile(RemoteOperation):
    filename: str
    description = "remove file"

    @property
    def command(self) -> str:
        return ROUTEROS_REMOVE_FILE_COMMAND.format(filename=self.filename)


@dataclass(frozen=True)
class ImportFile(RemoteOperation):
    filename: str
    description = "import file"

    @property
    def command(self) -> str:
        return ROUTEROS_IMPORT_COMMAND.format(filename=self.filename)


@dataclass(frozen=True)
class BindTLSService(RemoteOperation):
    service: str
    store_name: str
    description = "bind service"

    @property
    def command(self) -> str:
        return ROUTEROS_BIND_SERVICE_COMMAND.format(
            service=self.service, store_name=self.store_name
        )


@dataclass(frozen=True)
class BindTunnelServer(RemoteOperation):
    store_name: str
    description = "bind SSTP server"

    @property
    def command(self) -> str:
        return ROUTEROS_BIND_SSTP_COMMAND.format(store_name=self.store_name)
