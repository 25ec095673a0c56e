"""CLI for project terminal."""

import sys
from functools import lru_cache
from typing import Annotated, Any, Literal

import structlog
import yaml
from cyclopts import App, Parameter

from project_terminal.cache import ProjectCache
from project_terminal.config import get_config
from project_terminal.config_commands import config_app
from project_terminal.exceptions import TerminalError
from project_terminal.executor import CommandExecutor
from project_terminal.models import CommandResponse, ResponseType
from project_terminal.parser import command_suggestions, parse
from project_terminal.project_commands import project_app
from project_terminal.store import Store
from project_terminal.stores import YamlStore

logger = structlog.get_logger()

SESSION_PROJECT_KEY = "session.project_id"

app = App(
    help="Project Terminal - slash commands for todos, notes, dev log, components and stack",
)

app.command(project_app)
app.command(config_app)

_MARKERS = {
    ResponseType.SUCCESS: "✓",
    ResponseType.ERROR: "✗",
    ResponseType.WARNING: "!",
    ResponseType.INFO: "i",
    ResponseType.DATA: "•",
    ResponseType.PROMPT: "?",
}


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_store() -> Store:
    """Get the configured store."""
    config = get_config()
    return YamlStore(config.store_path)


@lru_cache(maxsize=1)
def get_cache() -> ProjectCache:
    """Get the process-wide project cache."""
    config = get_config()
    return ProjectCache(
        ttl_seconds=config.get_int("cache.ttl_seconds"),
        max_size=config.get_int("cache.max_size"),
    )


def get_user_id() -> str:
    return str(get_config().get("user.id"))


def get_executor() -> CommandExecutor:
    config = get_config()
    return CommandExecutor(
        get_store(),
        get_user_id(),
        cache=get_cache(),
        current_project_id=config.get(SESSION_PROJECT_KEY),
        max_commands=config.get_int("batch.max_commands"),
    )


def render(response: CommandResponse) -> str:
    """Format a response for the terminal."""
    lines = [f"{_MARKERS[response.type]} {response.message}"]
    if response.data:
        data: Any = response.to_dict()["data"]
        lines.append(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())
    for suggestion in response.suggestions:
        lines.append(f"  → {suggestion}")
    return "\n".join(lines)


def _remember_project(executor: CommandExecutor, before: str | None) -> None:
    if executor.current_project_id != before and executor.current_project_id is not None:
        get_config().set(SESSION_PROJECT_KEY, executor.current_project_id)


@app.command
def run(*line: Annotated[str, Parameter(allow_leading_hyphen=True)]) -> None:
    """Run one command line, or several joined with && or newlines."""
    executor = get_executor()
    before = executor.current_project_id
    response = executor.execute(" ".join(line))
    _remember_project(executor, before)
    print(render(response))
    if response.is_error:
        sys.exit(1)


@app.command
def shell() -> None:
    """Start an interactive session. Type exit or press Ctrl-D to leave."""
    executor = get_executor()
    print("Project Terminal. Type /help for commands.")
    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        line = line.strip()
        if not line:
            continue
        if line in ("exit", "quit"):
            break

        before = executor.current_project_id
        response = executor.execute(line)
        _remember_project(executor, before)
        print(render(response))

        # A lone partial keyword such as "/ad" also lists the commands it could complete to.
        if response.is_error and " " not in line:
            for completion in command_suggestions(line):
                print(f"  {completion}")


@app.command(name="parse")
def parse_line(*line: Annotated[str, Parameter(allow_leading_hyphen=True)]) -> None:
    """Show how a command line is parsed, without running it."""
    parsed = parse(" ".join(line))
    print(f"Command: {parsed.command_type.value} ({parsed.raw_command_text})")
    print(f"Args: {parsed.args}")
    print(f"Flags: {parsed.flags}")
    print(f"Project: {parsed.project_mention or '-'}")


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


def run_app() -> None:
    """Console script entry point."""
    try:
        app.meta()
    except (TerminalError, ValueError) as e:
        logger.debug("Command failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run_app()
