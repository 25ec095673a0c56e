"""`pt config` commands."""

from cyclopts import App

from project_terminal.config import get_config

config_app = App(name="config", help="Manage pt settings (user.id, store.path, cache.*, batch.max_commands)")


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Store a setting, e.g. ``pt config set user.id alice``."""
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Show the value pt would use for a setting."""
    value = get_config(use_global=global_).get(key)
    print(f"{key} is not set" if value is None else f"{key} = {value}")


@config_app.command(name="list")
def list_config(global_: bool = False, defaults: bool = False) -> None:
    """List stored settings.

    Args:
        global_: Only the settings in ~/.project-terminal/config.yaml
        defaults: Include built-in defaults that are not overridden
    """
    settings = get_config(use_global=global_).list(include_defaults=defaults)
    if not settings:
        print(f"No {_scope(global_)} configuration settings")
        return
    for key, value in settings.items():
        print(f"{key} = {value}")
