"""Shared utility functions for go-scaffold.

Provides the Rich console and logging setup, random handle generation, name
helpers, size formatting, and TCP port probing used when starting the server.
"""

from __future__ import annotations

import logging
import re
import secrets
import socket

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()

HANDLE_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
HANDLE_LENGTH = 12

MIN_VALID_PORT = 1024
MAX_VALID_PORT = 65535
MAX_PORT_ATTEMPTS = 50

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Route the root logger through a Rich handler.

    Safe to call more than once; existing handlers are replaced.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Handles and names
# ---------------------------------------------------------------------------


def generate_handle(length: int = HANDLE_LENGTH) -> str:
    """Return a random lowercase alphanumeric handle.

    Uses :mod:`secrets` so handles are not guessable from one another.
    """
    return "".join(secrets.choice(HANDLE_ALPHABET) for _ in range(length))


def sanitize_name(name: str) -> str:
    """Convert an arbitrary name to a safe binary/directory name.

    * Lowercases the input.
    * Replaces anything other than letters, digits, hyphens and underscores
      with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.

    Examples::

        sanitize_name("My Service") -> "my-service"
        sanitize_name("  Shop (v2)  ") -> "shop-v2"
    """
    result = re.sub(r"[^a-zA-Z0-9_-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


def module_basename(module_path: str) -> str:
    """Return the last segment of a Go module path.

    ``"github.com/acme/shop-api"`` -> ``"shop-api"``.  Trailing slashes are
    ignored; a major-version suffix such as ``/v2`` is skipped.
    """
    parts = [p for p in module_path.strip().split("/") if p]
    if not parts:
        return ""
    if len(parts) > 1 and re.fullmatch(r"v[0-9]+", parts[-1]):
        return parts[-2]
    return parts[-1]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_size(num_bytes: int) -> str:
    """Format a byte count as a short human-readable string.

    Examples::

        format_size(512)      -> "512 B"
        format_size(2048)     -> "2.0 KB"
        format_size(5242880)  -> "5.0 MB"
    """
    if num_bytes < 1024:
        return f"{max(num_bytes, 0)} B"
    size = float(num_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024 or unit == "GB":
            return f"{size:.1f} {unit}"
    return f"{size:.1f} GB"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_table(
    columns: list[str], rows: list[list[str]], title: str = ""
) -> None:
    """Print a simple table with the given column headers."""
    table = Table(title=title or None, show_header=True, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# Port helpers
# ---------------------------------------------------------------------------


def validate_port(port: int) -> bool:
    """Return ``True`` if *port* is in the unprivileged range (1024-65535)."""
    return MIN_VALID_PORT <= port <= MAX_VALID_PORT


def check_port_available(port: int, host: str = "") -> bool:
    """Check whether a TCP port can be bound.

    Tries to bind a listening socket on *port*; a failure means something is
    already using it.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host, port))
    except OSError:
        return False
    finally:
        sock.close()
    return True


def find_available_port(
    start_port: int, max_attempts: int = MAX_PORT_ATTEMPTS, host: str = ""
) -> int:
    """Return the first bindable port at or above *start_port*.

    Ports outside the valid range are replaced by 8080.  If none of the next
    *max_attempts* ports is free, the OS assigns one.
    """
    if not validate_port(start_port):
        start_port = 8080

    for port in range(start_port, min(start_port + max_attempts, MAX_VALID_PORT + 1)):
        if check_port_available(port, host):
            return port

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host, 0))
        return sock.getsockname()[1]
    finally:
        sock.close()
