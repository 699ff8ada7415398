"""Shared error handling for hbsite."""

import sys
from typing import NoReturn

import typer


class HbsiteError(Exception):
    """Base exception for hbsite operations."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigError(HbsiteError):
    """Raised when hbsite.yaml cannot be read or validated."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid config {path}: {reason}", exit_code=1)


class TemplateRenderError(HbsiteError):
    """Raised when a template fails to compile or render."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}", exit_code=1)


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on hbsite errors."""
    if isinstance(error, HbsiteError):
        exit_with_error(error.message, error.exit_code)
    else:
        # Unexpected error
        typer.echo(f"Unexpected error: {error}", err=True)
        sys.exit(1)
