"""Status lines for the CLI.

Results (diagnostic listings, JSON, diffs) go to stdout; everything in
this module goes to stderr through one shared rich console, one line per
message. Non-TTY output (CI, pipes) gets the same text without colour.

Usage::

    from nepguard.core.progress import check_summary, status

    status("Wrote token.yaml", style="success")  # ✓ Wrote token.yaml
    check_summary(classes=3, diagnostics=2)      # ! 3 classes checked, 2 diagnostics
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

# Nouns nepguard reports on whose plural is not singular + "s"
_IRREGULAR = {
    "class": "classes",
    "fix": "fixes",
    "property": "properties",
}


def _get_logger() -> BoundLogger:
    from nepguard.core.logging import get_logger

    return get_logger("progress")


def get_console() -> Console:
    """Get the shared stderr console (also used for rich tables)."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one styled line to stderr.

    Unknown styles print the bare message.
    """
    prefix = _STYLES.get(style, "")
    _console.print(f"{' ' * indent}{prefix}{message}", highlight=False)
    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Format ``count`` with the matching noun form, e.g. ``"3 classes"``."""
    if count == 1:
        return f"{count} {singular}"
    return f"{count} {plural or _IRREGULAR.get(singular, singular + 's')}"


def check_summary(*, classes: int, diagnostics: int) -> None:
    """Closing line of a check run."""
    checked = pluralize(classes, "class")
    if diagnostics:
        status(f"{checked} checked, {pluralize(diagnostics, 'diagnostic')}", style="warning")
    else:
        status(f"{checked} checked, compliant", style="success")


def fix_summary(*, fixes: int, edits: int) -> None:
    """Closing line of a fix run."""
    if not fixes:
        status("Nothing to fix", style="info")
        return
    status(f"Applied {pluralize(fixes, 'fix')} ({pluralize(edits, 'edit')})", style="success")
