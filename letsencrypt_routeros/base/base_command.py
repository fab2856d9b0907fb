"""
Base Command Class

Abstract base for letsencrypt-routeros commands.
Provides logger setup, output helpers and exit-code mapping.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape

from letsencrypt_routeros.constants import ExitCode
from letsencrypt_routeros.exceptions import ProvisionerError
from letsencrypt_routeros.logger import ProvisionLogger
from letsencrypt_routeros.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling with per-failure exit codes
    - JSON output support
    """

    def __init__(self, verbose: bool = False, json_output: bool = False):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console(quiet=json_output)
        self.error_console = Console(stderr=True)
        self.logger: Optional[ProvisionLogger] = None

    def init_logger(
        self, domain: str, command_name: str, log_dir: Optional[Path] = None
    ) -> ProvisionLogger:
        """
        Initialize command logger.

        In JSON mode progress output is silenced; errors still reach stderr.

        Args:
            domain: Domain being provisioned
            command_name: Command name
            log_dir: Optional directory for the run log file

        Returns:
            ProvisionLogger instance
        """
        self.logger = ProvisionLogger(
            domain,
            command_name,
            verbose=self.verbose,
            log_dir=log_dir,
            out=self.console,
            err=self.error_console,
        )
        return self.logger

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def output_json_error(
        self, error: str, details: Optional[Dict[str, Any]] = None, exit_code: int = 1
    ) -> None:
        """
        Output error as JSON and exit.

        Args:
            error: Error message
            details: Optional error details
            exit_code: Exit code
        """
        error_data = {"error": error, "exit_code": int(exit_code)}
        if details:
            error_data["details"] = details
        self.output_json(error_data, exit_code=exit_code)

    def show_header(
        self,
        title: str,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        """Print error message to stderr."""
        self.error_console.print(f"[red]✗ {escape(message)}[/red]")

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def handle_error(self, error: ProvisionerError) -> None:
        """
        Report a provisioning error with consistent formatting.

        Args:
            error: The error that stopped the command
        """
        if self.logger:
            self.logger.log_error(error.message, context=error.context)
        else:
            self.print_error(error.message)
            if error.context:
                self.error_console.print(f"  [dim]{escape(error.context)}[/dim]")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.error_console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            raise SystemExit(ExitCode.INTERRUPTED)
        except SystemExit:
            raise
        except ProvisionerError as e:
            self.handle_error(e)
            if self.json_output:
                self.output_json_error(
                    e.message, details={"context": e.context} if e.context else None,
                    exit_code=e.exit_code,
                )
            raise SystemExit(e.exit_code)
        except Exception as e:
            error_type = type(e).__name__
            self.error_console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            raise SystemExit(ExitCode.CONFIGURATION_ERROR)
        finally:
            if self.logger:
                if self.logger.log_path:
                    self.print_dim(f"Logs saved to: {self.logger.log_path}")
                self.logger.close()
