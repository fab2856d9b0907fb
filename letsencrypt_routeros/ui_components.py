"""
letsencrypt-routeros - UI Components
Standardized headers and summaries
"""

from rich.console import Console
from rich.markup import escape

LOGO = "letsencrypt-routeros"

BRAND_COLOR = "cyan"


def show_header(
    title: str,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Provision Certificate")
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Provision Certificate",
            details={"Host": "203.0.113.5", "Domain": "example.com"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{escape(str(value))}[/{BRAND_COLOR}]")

    console.print()
