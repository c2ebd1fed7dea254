"""Shared console for CLI commands."""

from __future__ import annotations

from rich.console import Console

console = Console()
