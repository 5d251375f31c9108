"""Console logging helpers built on Rich."""

from rich.console import Console

_console = Console(stderr=True, highlight=False)


def get_console() -> Console:
    """Return the shared stderr console.

    Returns
    -------
    Console
        Rich console used for all progress and diagnostic output.

    """
    return _console


def log_info(message: str) -> None:
    """Log an informational message."""
    _console.print(f"[bold blue]INFO:[/bold blue] {message}")


def log_success(message: str) -> None:
    """Log a success message."""
    _console.print(f"[bold green]✓[/bold green] {message}")


def log_warning(message: str) -> None:
    """Log a warning message."""
    _console.print(f"[bold yellow]WARN:[/bold yellow] {message}")


def log_error(message: str) -> None:
    """Log an error message."""
    _console.print(f"[bold red]ERROR:[/bold red] {message}")
