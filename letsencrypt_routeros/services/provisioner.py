"""
Provisioner

Uploads a certificate and key to a RouterOS appliance, imports them into
the certificate store, and points the TLS services at the new certificate.

Each step is one remote command. Steps run in a fixed order and nothing
is retried; a failed run is expected to be re-run as a whole (pre-cleanup
removes whatever a previous attempt left behind).
"""

import os
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from letsencrypt_routeros.constants import (
    SETTLE_DELAY_SECONDS,
    SSH_HELP_URL,
    TLS_SERVICES,
    TUNNEL_SERVICES,
)
from letsencrypt_routeros.exceptions import (
    CertificateNotFoundError,
    CertificateUnreadableError,
    CertificateUploadError,
    CleanupError,
    ConnectionProbeError,
    KeyNotFoundError,
    KeyUnreadableError,
    KeyUploadError,
    ServiceConfigurationError,
    SetupError,
    SSHError,
    UnknownServiceError,
)
from letsencrypt_routeros.logger import ProvisionLogger
from letsencrypt_routeros.models.operations import (
    BindTLSService,
    BindTunnelServer,
    ImportFile,
    ProbeSystem,
    RemoteOperation,
    RemoveCertificate,
    RemoveFile,
)
from letsencrypt_routeros.models.results import ProvisionReport, ProvisionState
from letsencrypt_routeros.models.settings import Artifact, ArtifactKind, Settings
from letsencrypt_routeros.services.executor import RemoteExecutor


def binding_for(service: str, store_name: str) -> RemoteOperation:
    """
    Return the operation that binds service to store_name.

    Raises:
        UnknownServiceError: service is neither a TLS service nor the SSTP server
    """
    if service in TLS_SERVICES:
        return BindTLSService(service=service, store_name=store_name)
    if service in TUNNEL_SERVICES:
        return BindTunnelServer(store_name=store_name)
    raise UnknownServiceError(service, TLS_SERVICES + TUNNEL_SERVICES)


class Provisioner:
    """
    Runs the provisioning workflow against one appliance.

    Steps (see run()):
    - verify local certificate and key
    - probe the SSH session
    - remove stale transient files
    - upload + import certificate, then key
    - bind services
    - remove transient files
    """

    def __init__(
        self,
        settings: Settings,
        executor: RemoteExecutor,
        logger: ProvisionLogger,
        settle_delay: float = SETTLE_DELAY_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.settings = settings
        self.executor = executor
        self.logger = logger
        self.settle_delay = settle_delay
        self.sleep = sleep or time.sleep
        self.state = ProvisionState.CONFIGURING
        self.report = ProvisionReport(host=settings.host, domain=settings.domain)

    def _enter(self, state: ProvisionState) -> None:
        self.state = state
        self.report.state = state

    def _warn(self, message: str) -> None:
        self.report.warnings.append(message)
        self.logger.warning(message)

    def verify_requirements(self) -> None:
        """
        Verify that the certificate and key are present and readable.

        Checked in order: certificate exists, certificate readable,
        key exists, key readable. The first failure is raised.
        """
        checks = [
            (self.settings.certificate, CertificateNotFoundError, CertificateUnreadableError),
            (self.settings.key, KeyNotFoundError, KeyUnreadableError),
        ]
        for path, not_found, unreadable in checks:
            self.logger.log(f"Looking for '{path}'")
            if not Path(path).is_file():
                raise not_found(path)
            if not os.access(path, os.R_OK):
                raise unreadable(path)
            self.logger.success(f"Found {path}")

    def plan_bindings(self, store_name: str) -> List[Tuple[int, str, RemoteOperation]]:
        """Map every configured service to its binding operation (1-based index)."""
        return [
            (index, service, binding_for(service, store_name))
            for index, service in enumerate(self.settings.services, start=1)
        ]

    def verify_connection(self) -> None:
        """Run a harmless command to make sure we can log in."""
        try:
            result = self.executor.execute(ProbeSystem())
        except SSHError as e:
            raise ConnectionProbeError(e.message, context=e.context) from e

        if result.is_failure:
            raise ConnectionProbeError(
                f"Could not connect to {self.settings.connection.connection_string} "
                f"on port {self.settings.port}",
                context=f"{result.output or 'no output'}\nMore info: {SSH_HELP_URL}",
            )
        self.logger.success("Connected")

    def delete_file(self, filename: str) -> bool:
        """
        Remove a file from the appliance.

        Only the file is removed; an imported store entry stays in place.
        Returns False (and warns) if RouterOS refused; transport errors
        propagate as SSHError.
        """
        result = self.executor.execute(RemoveFile(filename=filename))
        if result.is_failure:
            self._warn(f"Could not delete file '{filename}'")
            return False
        self.logger.success(f"Deleted file '{filename}'")
        return True

    def _remove_transient_files(self) -> None:
        self.delete_file(self.settings.certificate_artifact.remote_file)
        self.delete_file(self.settings.key_artifact.remote_file)

    def setup(self) -> None:
        """Remove transient files a previous run may have left behind."""
        try:
            self._remove_transient_files()
        except SSHError as e:
            raise SetupError(e.message, context=e.context) from e

    def cleanup(self) -> None:
        """Remove the transient files once everything is imported."""
        try:
            self._remove_transient_files()
        except SSHError as e:
            raise CleanupError(e.message, context=e.context) from e

    def upload_artifact(self, artifact: Artifact) -> None:
        """
        Upload a certificate or key and import it into the certificate store.

        1. remove the store entry from an earlier run (may fail, not fatal)
        2. copy the file to the appliance (fatal)
        3. wait for the appliance to settle
        4. import the file (fatal; the uploaded file is left for inspection)
        """
        error_class = (
            CertificateUploadError
            if artifact.kind == ArtifactKind.CERTIFICATE
            else KeyUploadError
        )
        self.logger.log(
            f"Processing {artifact.local_path} => {artifact.remote_file} [{artifact.store_name}]"
        )

        try:
            removed = self.executor.execute(RemoveCertificate(store_name=artifact.store_name))
            if removed.is_success:
                self.logger.success(f"Removed previous {artifact.label} '{artifact.store_name}'")
            else:
                self._warn(f"Could not remove previous {artifact.label} '{artifact.store_name}'")

            uploaded = self.executor.upload(artifact.local_path, artifact.remote_file)
        except SSHError as e:
            raise error_class(artifact.label, "upload", context=e.format_message()) from e

        if uploaded.is_failure:
            raise error_class(
                artifact.label,
                "upload",
                context=f"{artifact.local_path} -> {artifact.remote_file}: {uploaded.output or 'no output'}",
            )
        self.logger.success(f"Uploaded {artifact.remote_file}")

        self.sleep(self.settle_delay)

        try:
            imported = self.executor.execute(ImportFile(filename=artifact.remote_file))
        except SSHError as e:
            raise error_class(artifact.label, "import", context=e.format_message()) from e

        if imported.is_failure:
            raise error_class(
                artifact.label,
                "import",
                context=f"{artifact.remote_file} -> {artifact.store_name}: {imported.output or 'no output'}",
            )
        self.logger.success(f"Imported {artifact.remote_file} as {artifact.store_name}")

    def upload_certificate(self) -> None:
        self.upload_artifact(self.settings.certificate_artifact)
        self.report.certificate_store_name = self.settings.certificate_artifact.store_name

    def upload_key(self) -> None:
        self.upload_artifact(self.settings.key_artifact)
        self.report.key_store_name = self.settings.key_artifact.store_name

    def configure_services(self) -> None:
        """
        Point every configured service at the imported certificate.

        The whole list is checked before anything is sent, so an unknown
        service aborts without touching the appliance. A failed binding
        stops the loop and reports the 1-based position of the service.
        """
        store_name = self.settings.certificate_artifact.store_name

        for index, service, operation in self.plan_bindings(store_name):
            self.logger.log(f"Configuring {service} to use {store_name}")
            try:
                result = self.executor.execute(operation)
            except SSHError as e:
                raise ServiceConfigurationError(service, index, context=e.format_message()) from e

            if result.is_failure:
                raise ServiceConfigurationError(
                    service, index, context=result.output or "no output"
                )
            self.report.services.append(service)
            self.logger.success(f"{service} uses {store_name}")

    def run(self) -> ProvisionReport:
        """
        Run the whole workflow.

        Returns:
            ProvisionReport in state DONE

        Raises:
            ProvisionerError: any fatal step failed; state is left at FAILED
        """
        steps = [
            (ProvisionState.VERIFYING_LOCAL, "Checking certificate and key", self._verify_local),
            (ProvisionState.PROBING_SESSION, "Checking connection to RouterOS", self.verify_connection),
            (ProvisionState.PRE_CLEANUP, "Removing stale files", self.setup),
            (ProvisionState.TRANSFERRING_CERT, "Processing certificate", self.upload_certificate),
            (ProvisionState.TRANSFERRING_KEY, "Processing key", self.upload_key),
            (ProvisionState.CONFIGURING_SERVICES, "Configuring services", self.configure_services),
            (ProvisionState.POST_CLEANUP, "Cleaning up", self.cleanup),
        ]

        try:
            for state, title, action in steps:
                self._enter(state)
                self.logger.step(title)
                action()
        except Exception:
            self._enter(ProvisionState.FAILED)
            raise

        self._enter(ProvisionState.DONE)
        return self.report

    def _verify_local(self) -> None:
        self.verify_requirements()
        # Reject a bad service list before any remote command is issued
        self.plan_bindings(self.settings.certificate_artifact.store_name)
