"""
Configuration Management Service

Merges built-in defaults, settings files, the environment, command-line
flags and positional arguments into one immutable Settings value.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from dotenv import dotenv_values

from letsencrypt_routeros.constants import (
    CONFIG_FILE_OPTIONS,
    DEFAULT_CERTIFICATE_TEMPLATE,
    DEFAULT_KEY_TEMPLATE,
    DEFAULT_ROUTEROS_USER,
    DEFAULT_SERVICES,
    DEFAULT_SSH_OPTIONS,
)
from letsencrypt_routeros.exceptions import ConfigurationError, MissingParameterError
from letsencrypt_routeros.models.settings import Settings

# Settings field -> name used in settings files and the environment
SETTING_NAMES = {
    "user": "ROUTEROS_USER",
    "host": "ROUTEROS_HOST",
    "port": "ROUTEROS_SSH_PORT",
    "private_key": "ROUTEROS_PRIVATE_KEY",
    "domain": "DOMAIN",
    "certificate": "CERTIFICATE",
    "key": "KEY",
    "ssh_options": "ROUTEROS_SSH_OPTIONS",
    "services": "ROUTEROS_SERVICES",
}

# Order of the positional arguments, with the name used in error messages
POSITIONAL_FIELDS = [
    ("user", "username"),
    ("host", "hostname"),
    ("port", "port"),
    ("private_key", "key"),
    ("domain", "domain"),
]


class ConfigService:
    """
    Resolves settings for one provisioning run.

    Precedence, lowest first:
    - built-in defaults
    - .env, then letsencrypt-routeros.settings (both applied when present)
    - an explicit settings file (--config / CONFIG_FILE)
    - process environment
    - command-line flags
    - positional arguments, only for values that are still empty
    """

    def __init__(
        self,
        working_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        config_file: Optional[str] = None,
    ):
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.environ = os.environ if environ is None else environ
        self.config_file = config_file

    def find_config_files(self) -> List[Path]:
        """Return existing settings files, lowest priority first."""
        found = [
            self.working_dir / name
            for name in CONFIG_FILE_OPTIONS
            if (self.working_dir / name).is_file()
        ]

        if self.config_file:
            explicit = Path(self.config_file).expanduser()
            if not explicit.is_absolute():
                explicit = self.working_dir / explicit
            if not explicit.is_file():
                raise ConfigurationError(
                    f"Could not load CONFIG_FILE '{self.config_file}'",
                    context=f"Searched: {explicit}",
                )
            found.append(explicit)

        return found

    def load_config_files(self) -> Dict[str, str]:
        """
        Read every settings file into one overlay keyed by Settings field.

        Unknown keys are ignored. A key set to an empty string in a later
        file clears the value from an earlier one.
        """
        overlay: Dict[str, str] = {}
        for path in self.find_config_files():
            values = dotenv_values(path)
            for field, name in SETTING_NAMES.items():
                if values.get(name) is not None:
                    overlay[field] = values[name]
        return overlay

    def load_environment(self) -> Dict[str, str]:
        """Read non-empty settings from the environment."""
        return {
            field: self.environ[name]
            for field, name in SETTING_NAMES.items()
            if self.environ.get(name)
        }

    def resolve(
        self,
        flags: Optional[Mapping[str, Optional[str]]] = None,
        positional: Sequence[str] = (),
    ) -> Settings:
        """
        Build the final Settings.

        Args:
            flags: Values from command-line options keyed by Settings field;
                None means the flag was not given
            positional: Positional arguments (user host port key domain)

        Raises:
            MissingParameterError: A required value could not be found
            ConfigurationError: A value is present but unusable
        """
        values: Dict[str, str] = {
            "user": DEFAULT_ROUTEROS_USER,
            "host": "",
            "port": "",
            "private_key": "",
            "domain": "",
            "certificate": "",
            "key": "",
            "ssh_options": DEFAULT_SSH_OPTIONS,
            "services": ",".join(DEFAULT_SERVICES),
        }
        values.update(self.load_config_files())
        values.update(self.load_environment())
        values.update(
            {
                field: value
                for field, value in (flags or {}).items()
                if field in SETTING_NAMES and value is not None
            }
        )

        for index, (field, label) in enumerate(POSITIONAL_FIELDS):
            if values[field]:
                continue
            if index < len(positional) and positional[index]:
                values[field] = positional[index]
            else:
                raise MissingParameterError(label, SETTING_NAMES[field])

        port = values["port"].strip()
        if not (port.isascii() and port.isdigit()) or not 0 < int(port) < 65536:
            raise ConfigurationError(
                f"Invalid port '{values['port']}'",
                context="The SSH port must be a number between 1 and 65535",
            )

        domain = values["domain"]
        services = tuple(
            service.strip() for service in values["services"].split(",") if service.strip()
        )
        # Each service is bound at most once
        duplicates = sorted({service for service in services if services.count(service) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate services: {', '.join(duplicates)}",
                context="List each service at most once",
            )

        return Settings(
            user=values["user"],
            host=values["host"],
            port=port,
            private_key=values["private_key"],
            domain=domain,
            certificate=values["certificate"]
            or DEFAULT_CERTIFICATE_TEMPLATE.format(domain=domain),
            key=values["key"] or DEFAULT_KEY_TEMPLATE.format(domain=domain),
            ssh_options=values["ssh_options"],
            services=services,
        )
