"""
Provision Command

Upload a certificate and key to RouterOS and bind services to them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

import rich_click as click

from letsencrypt_routeros import __version__
from letsencrypt_routeros.base import BaseCommand
from letsencrypt_routeros.constants import CONFIG_FILE_OPTIONS
from letsencrypt_routeros.services import ConfigService, Provisioner, SSHService


@dataclass
class ProvisionOptions:
    """Options for provision command."""

    flags: Dict[str, Optional[str]] = field(default_factory=dict)
    positional: Tuple[str, ...] = ()
    config_file: Optional[str] = None
    log_dir: Optional[Path] = None


class ProvisionCommand(BaseCommand):
    """
    Provision a certificate on a RouterOS device.

    Features:
    - Settings from files, environment, flags and positional arguments
    - Local prerequisite and connection checks before any change
    - Upload, import and service binding with distinct exit codes
    - Optional run log file and JSON summary
    """

    def __init__(
        self,
        options: ProvisionOptions,
        verbose: bool = False,
        json_output: bool = False,
        config_service: Optional[ConfigService] = None,
    ):
        super().__init__(verbose=verbose, json_output=json_output)
        self.options = options
        self.config_service = config_service or ConfigService(
            config_file=options.config_file
        )

    def execute(self) -> None:
        """Execute provision command."""
        settings = self.config_service.resolve(
            self.options.flags, self.options.positional
        )

        self.show_header(
            title="Provision Certificate",
            details={
                "Host": f"{settings.host}:{settings.port}",
                "Domain": settings.domain,
                "Services": ", ".join(settings.services),
            },
        )

        logger = self.init_logger(settings.domain, "provision", log_dir=self.options.log_dir)
        logger.log(repr(settings), "DEBUG")

        ssh_service = SSHService(settings.connection, logger=logger)
        report = Provisioner(settings, ssh_service, logger).run()

        if self.json_output:
            self.output_json(report.to_dict())
            return

        self.console.print()
        self.print_success(
            f"{', '.join(report.services) or 'No services'} now use {report.certificate_store_name}"
        )


def _usage_epilog() -> str:
    files = "\n".join(f"  * {name}" for name in CONFIG_FILE_OPTIONS)
    return f"\b\nSettings files read from the working directory:\n{files}"


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_usage_epilog(),
)
@click.argument("positional", nargs=-1, metavar="[USER] [HOST] [PORT] [SSH_KEY] [DOMAIN]")
@click.option("-C", "--certificate", help="Certificate file to upload")
@click.option("-d", "--domain", help="Domain the certificate was issued for")
@click.option("-H", "--host", help="RouterOS host name or address")
@click.option("-K", "--key", help="Private key belonging to the certificate")
@click.option("-k", "--ssh-key", "private_key", help="SSH private key for the RouterOS user")
@click.option("-o", "--ssh-options", help="Extra options passed to ssh and scp")
@click.option("-p", "--port", help="RouterOS SSH port")
@click.option("-u", "--user", help="RouterOS administrative user")
@click.option("-s", "--services", help="Comma-separated services to configure")
@click.option(
    "-c", "--config", "config_file", envvar="CONFIG_FILE", help="Additional settings file"
)
@click.option(
    "--log-dir",
    envvar="ROUTEROS_LOG_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write a run log below this directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.version_option(version=__version__)
def provision(
    positional,
    certificate,
    domain,
    host,
    key,
    private_key,
    ssh_options,
    port,
    user,
    services,
    config_file,
    log_dir,
    verbose,
    json_output,
):
    """
    Upload a certificate and key to RouterOS and use them for TLS services

    The certificate and key are copied with scp, imported into the
    certificate store, and www-ssl, api-ssl and the SSTP server are
    pointed at the imported certificate.

    Examples:
        # Everything on the command line
        letsencrypt-routeros -H 203.0.113.5 -p 22 -k ~/.ssh/routeros -d example.com

        # Positional form
        letsencrypt-routeros admin 203.0.113.5 22 ~/.ssh/routeros example.com
    """
    options = ProvisionOptions(
        flags={
            "certificate": certificate,
            "domain": domain,
            "host": host,
            "key": key,
            "private_key": private_key,
            "ssh_options": ssh_options,
            "port": port,
            "user": user,
            "services": services,
        },
        positional=tuple(positional),
        config_file=config_file,
        log_dir=log_dir,
    )
    cmd = ProvisionCommand(options, verbose=verbose, json_output=json_output)
    cmd.run()
