"""CLI output styling utilities.

Consistent styling helpers for CLI output:
- Cyan bold for section headers and labels
- Green for success messages (with checkmark)
- Red for error messages (with cross)
- Yellow for warnings
- Dim for neutral/empty state messages
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_error",
    "style_header",
    "style_label",
    "style_success",
    "style_warning",
]

import click


def style_header(title: str) -> str:
    """Style a section header with dashes.

    Example:
        >>> click.echo(style_header("Application logs"))
        --- Application logs ---
    """
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_label(label: str) -> str:
    """Style a label (colon appended) in cyan bold.

    Example:
        >>> click.echo(style_label("Logs") + f" {path}")
        Logs: target/api_gateway.log
    """
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_success(message: str) -> str:
    """Style a success message with checkmark.

    Example:
        >>> click.echo(style_success("Application stopped"))
        ✓ Application stopped
    """
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    """Style an error message with cross mark.

    Example:
        >>> click.echo(style_error("Compilation failed"), err=True)
        ✗ Compilation failed
    """
    return click.style(f"✗ {message}", fg="red")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)


def style_warning(message: str) -> str:
    """Style a warning message in yellow bold.

    Example:
        >>> click.echo(style_warning("Application is not running"))
        Warning: Application is not running
    """
    return click.style(f"Warning: {message}", fg="yellow", bold=True)
