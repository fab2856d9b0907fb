"""
letsencrypt-routeros Exception Hierarchy

Every failure kind carries its own exit code so scripts calling the tool
can tell them apart.
"""

from typing import Optional

from letsencrypt_routeros.constants import ExitCode


class ProvisionerError(Exception):
    """Base exception for all provisioning errors."""

    exit_code: int = ExitCode.CONFIGURATION_ERROR

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(ProvisionerError):
    """Raised when configuration is invalid or missing."""

    exit_code = ExitCode.CONFIGURATION_ERROR


class MissingParameterError(ConfigurationError):
    """Raised when a required setting has no value after resolution."""

    def __init__(self, field_name: str, setting: str):
        self.field_name = field_name
        self.setting = setting
        message = f"No {field_name} provided"
        context = f"Set {setting}, pass the matching flag, or give it positionally"
        super().__init__(message, context)


class PrerequisiteError(ProvisionerError):
    """Raised when a local file needed for the upload is not usable."""

    def __init__(self, label: str, path: str, problem: str):
        self.label = label
        self.path = path
        super().__init__(f"{label} '{path}' {problem}")


class CertificateNotFoundError(PrerequisiteError):
    exit_code = ExitCode.CERTIFICATE_NOT_FOUND

    def __init__(self, path: str):
        super().__init__("Certificate", path, "not found")


class CertificateUnreadableError(PrerequisiteError):
    exit_code = ExitCode.CERTIFICATE_UNREADABLE

    def __init__(self, path: str):
        super().__init__("Certificate", path, "not readable")


class KeyNotFoundError(PrerequisiteError):
    exit_code = ExitCode.KEY_NOT_FOUND

    def __init__(self, path: str):
        super().__init__("Key", path, "not found")


class KeyUnreadableError(PrerequisiteError):
    exit_code = ExitCode.KEY_UNREADABLE

    def __init__(self, path: str):
        super().__init__("Key", path, "not readable")


class SSHError(ProvisionerError):
    """Raised when the ssh/scp binaries cannot be run at all."""

    exit_code = ExitCode.CONNECTION_FAILED


class ConnectionProbeError(ProvisionerError):
    """Raised when the appliance does not answer the probe command."""

    exit_code = ExitCode.CONNECTION_FAILED


class SetupError(ProvisionerError):
    """Raised when pre-run cleanup cannot reach the appliance."""

    exit_code = ExitCode.SETUP_FAILED


class UploadError(ProvisionerError):
    """Raised when transferring or importing an artifact fails."""

    def __init__(self, artifact_name: str, step: str, context: Optional[str] = None):
        self.artifact_name = artifact_name
        self.step = step
        super().__init__(f"Could not {step} {artifact_name}", context)


class CertificateUploadError(UploadError):
    exit_code = ExitCode.CERTIFICATE_UPLOAD_FAILED


class KeyUploadError(UploadError):
    exit_code = ExitCode.KEY_UPLOAD_FAILED


class ServiceConfigurationError(ProvisionerError):
    """Raised when a service cannot be bound to the certificate."""

    def __init__(self, service: str, index: int, context: Optional[str] = None):
        self.service = service
        self.index = index
        self.exit_code = ExitCode.SERVICE_CONFIGURATION_BASE + index
        super().__init__(f"Could not configure service #{index} '{service}'", context)


class UnknownServiceError(ProvisionerError):
    """Raised when the service list names a service we cannot configure."""

    exit_code = ExitCode.UNKNOWN_SERVICE

    def __init__(self, service: str, known_services: list[str]):
        self.service = service
        self.known_services = known_services
        message = f"Unknown service '{service}'"
        context = f"Known services: {', '.join(known_services)}"
        super().__init__(message, context)


class CleanupError(ProvisionerError):
    """Raised when post-run cleanup cannot reach the appliance."""

    exit_code = ExitCode.CLEANUP_FAILED
