"""Project Terminal - a slash-command language over project data."""

from project_terminal.executor import CommandExecutor
from project_terminal.parser import parse

__all__ = ["CommandExecutor", "parse"]
