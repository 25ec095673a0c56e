"""Store implementations."""

from project_terminal.stores.memory import MemoryStore
from project_terminal.stores.yaml_store import YamlStore

__all__ = ["MemoryStore", "YamlStore"]
