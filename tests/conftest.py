"""Shared fixtures for project terminal tests."""

import pytest

from project_terminal.cache import ProjectCache
from project_terminal.executor import CommandExecutor
from project_terminal.models import Component, ComponentCategory, Project, Role, Todo
from project_terminal.projects import ProjectResolver
from project_terminal.stores import MemoryStore


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ProjectCache:
    return ProjectCache(ttl_seconds=300, max_size=1000, clock=clock)


@pytest.fixture
def store() -> MemoryStore:
    """A store where alice owns Backend and Frontend, bob edits Backend and carol views it."""
    store = MemoryStore()
    backend = store.create_project("Backend", "alice", "API and services")
    store.create_project("Frontend", "alice")
    store.create_project("Personal", "bob")
    store.add_member(backend.id, "bob", Role.EDITOR)
    store.add_member(backend.id, "carol", Role.VIEWER)
    return store


@pytest.fixture
def backend(store: MemoryStore) -> Project:
    return store.find_owned_projects("alice", name="Backend")[0]


@pytest.fixture
def frontend(store: MemoryStore) -> Project:
    return store.find_owned_projects("alice", name="Frontend")[0]


@pytest.fixture
def seeded_backend(store: MemoryStore, backend: Project) -> Project:
    """Backend with two todos, one subtask and three components."""
    first = Todo(id="todo-1", title="Fix login bug")
    backend.todos = [
        first,
        Todo(id="todo-2", title="Write API docs"),
        Todo(id="sub-1", title="Reproduce locally", parent_todo_id=first.id),
    ]
    backend.components = [
        Component(id="comp-login", title="Login Page", category=ComponentCategory.FRONTEND),
        Component(id="comp-auth", title="Auth Service", category=ComponentCategory.BACKEND),
        Component(id="comp-db", title="User Database", category=ComponentCategory.DATABASE),
    ]
    store.save_project(backend)
    return store.get_project(backend.id)  # type: ignore[return-value]


@pytest.fixture
def resolver(store: MemoryStore, cache: ProjectCache) -> ProjectResolver:
    return ProjectResolver(store, cache)


@pytest.fixture
def executor(store: MemoryStore, cache: ProjectCache) -> CommandExecutor:
    return CommandExecutor(store, "alice", cache=cache)
