"""Tests for note and dev log handlers."""

from project_terminal.executor import CommandExecutor
from project_terminal.models import Project, ResponseType
from project_terminal.stores import MemoryStore


def test_add_and_view_notes(executor: CommandExecutor, store: MemoryStore, backend: Project) -> None:
    """Test creating a note and listing previews."""
    executor.execute('/add note API decisions --content="REST over GraphQL" @Backend')
    response = executor.execute("/view notes @Backend")

    assert response.type == ResponseType.DATA
    notes = response.data["notes"]  # type: ignore[index]
    assert notes == [
        {"index": 1, "id": notes[0]["id"], "title": "API decisions", "preview": "REST over GraphQL"},
    ]


def test_view_single_note(executor: CommandExecutor) -> None:
    """Test showing one note in full."""
    executor.execute('/add note Runbook --content="restart the pods" @Backend')
    response = executor.execute("/view notes runbook @Backend")

    assert response.message == 'Note: "Runbook"'
    assert response.data["note"]["content"] == "restart the pods"  # type: ignore[index]


def test_long_content_is_previewed(executor: CommandExecutor) -> None:
    """Test preview truncation."""
    executor.execute(f'/add note Long --content="{"x" * 150}" @Backend')
    response = executor.execute("/view notes @Backend")
    assert response.data["notes"][0]["preview"] == "x" * 100 + "..."  # type: ignore[index]


def test_edit_note(executor: CommandExecutor, store: MemoryStore, backend: Project) -> None:
    """Test editing content by position."""
    executor.execute("/add note Ideas @Backend")
    response = executor.execute('/edit note 1 --content="use a queue" @Backend')

    assert response.type == ResponseType.SUCCESS
    assert store.get_project(backend.id).notes[0].content == "use a queue"  # type: ignore[union-attr]


def test_edit_note_prompts_without_flags(executor: CommandExecutor) -> None:
    """Test the note edit wizard."""
    executor.execute("/add note Ideas @Backend")
    response = executor.execute("/edit note Ideas @Backend")
    assert response.type == ResponseType.PROMPT
    assert response.data["wizard_type"] == "edit_note"  # type: ignore[index]


def test_delete_note(executor: CommandExecutor, store: MemoryStore, backend: Project) -> None:
    """Test confirmed deletion."""
    executor.execute("/add note Scratch @Backend")
    response = executor.execute("/delete note scratch --confirm @Backend")

    assert response.message == 'Deleted note: "Scratch"'
    assert store.get_project(backend.id).notes == []  # type: ignore[union-attr]


def test_add_devlog_free_text(executor: CommandExecutor, store: MemoryStore, backend: Project) -> None:
    """Test dev log entries from positional text."""
    response = executor.execute("/devlog fixed memory leak in user service @Backend")

    assert response.type == ResponseType.SUCCESS
    entry = store.get_project(backend.id).dev_log[0]  # type: ignore[union-attr]
    assert entry.description == "fixed memory leak in user service"
    assert entry.title == ""


def test_view_edit_delete_devlog(executor: CommandExecutor, store: MemoryStore, backend: Project) -> None:
    """Test the remaining dev log commands."""
    executor.execute("/add devlog first entry @Backend && /add devlog second entry @Backend")

    listing = executor.execute("/view devlog @Backend")
    assert [e["description"] for e in listing.data["entries"]] == ["first entry", "second entry"]  # type: ignore[index]

    executor.execute('/edit devlog 2 --title="Release" @Backend')
    assert store.get_project(backend.id).dev_log[1].title == "Release"  # type: ignore[union-attr]

    executor.execute("/delete devlog release --confirm @Backend")
    assert [e.description for e in store.get_project(backend.id).dev_log] == ["first entry"]  # type: ignore[union-attr]


def test_empty_devlog_is_info(executor: CommandExecutor) -> None:
    """Test the empty listing."""
    response = executor.execute("/view devlog @Frontend")
    assert response.type == ResponseType.INFO


def test_confirm_command_targets_prompted_note(
    executor: CommandExecutor, store: MemoryStore, backend: Project
) -> None:
    """Test that the returned confirmation deletes the note that was asked about."""
    executor.execute('/add note --title="Deploy steps" @Backend && /add note Deploy @Backend')

    prompt = executor.execute("/delete note 2 @Backend")
    command = prompt.data["confirmation_data"]["command"]  # type: ignore[index]
    executor.execute(f"{command} @Backend")

    assert [n.title for n in store.get_project(backend.id).notes] == ["Deploy steps"]  # type: ignore[union-attr]
