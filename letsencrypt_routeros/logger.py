"""
Logging system for letsencrypt-routeros
Progress lines go to stdout, errors and warnings to stderr,
and everything optionally to a run log file.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from letsencrypt_routeros.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()
error_console = Console(stderr=True)

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class ProvisionLogger:
    """
    Manages logging for a provisioning run
    - Shows one progress line per step on stdout
    - Sends warnings and errors to stderr with context
    - Writes every line, command and command output to a log file (if enabled)
    """

    def __init__(
        self,
        domain: str,
        operation: str = "provision",
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        out: Optional[Console] = None,
        err: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            domain: Domain whose certificate is being provisioned
            operation: Operation name, used in the log file name
            verbose: If True, also show commands and their output in the console
            log_dir: Directory for log files; no file is written when None
            out: Console for progress output (defaults to stdout)
            err: Console for errors and warnings (defaults to stderr)
        """
        self.domain = domain
        self.operation = operation
        self.verbose = verbose
        self.console = out or console
        self.error_console = err or error_console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        if log_dir:
            # Structure: {log_dir}/{domain}/{date}/{time}_{operation}.log
            now = datetime.now()
            run_logs_dir = Path(log_dir) / domain / now.strftime(LOG_DATE_FORMAT)
            run_logs_dir.mkdir(parents=True, exist_ok=True)

            self.log_path = run_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"
            self.log_file = open(self.log_path, "w", buffering=1)
            self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
letsencrypt-routeros Log
{"=" * 80}
Domain: {self.domain}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)

    def _write(self, line: str):
        if self.log_file:
            self.log_file.write(line)

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._write(f"[{timestamp}] [{level}] {message}\n")

        if self.verbose:
            if level == "ERROR":
                self.error_console.print(f"[red]{escape(message)}[/red]")
            elif level == "WARNING":
                self.error_console.print(f"[yellow]{escape(message)}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{escape(message)}[/dim]")
            else:
                self.console.print(message, markup=False)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output

        Always written to the log file, shown in the console only when verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)
        for line in clean_output.splitlines():
            self._write(f"  [{stream}] {line}\n")

        if self.verbose:
            self.console.print(output.rstrip(), markup=False, highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., artifact and step that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if self.current_step:
            error_block += f"\nStep: {self.current_step}\n"
        if context:
            error_block += f"\nContext: {context}\n"
        error_block += f"{'!' * 80}\n\n"
        self._write(error_block)

        self.error_console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.error_console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.error_console.print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

