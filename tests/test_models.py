"""Tests for data models."""

from project_terminal.commands import CommandType
from project_terminal.models import (
    BatchResult,
    CommandOutcome,
    CommandResponse,
    Component,
    ComponentCategory,
    ParsedCommand,
    Priority,
    Project,
    Relationship,
    RelationType,
    ResponseType,
    Role,
    TeamMember,
    Todo,
    TodoStatus,
)


def test_todo_defaults() -> None:
    """Test todo default values."""
    todo = Todo(id="t1", title="Write tests")
    assert todo.priority == Priority.MEDIUM
    assert todo.status == TodoStatus.NOT_STARTED
    assert not todo.completed
    assert not todo.is_subtask
    assert todo.label == "Write tests"


def test_project_round_trip() -> None:
    """Test serializing a project aggregate to plain data and back."""
    project = Project(
        id="p1",
        name="Backend",
        owner_id="alice",
        todos=[Todo(id="t1", title="Fix", priority=Priority.HIGH, parent_todo_id=None)],
        components=[
            Component(
                id="c1",
                title="Auth",
                category=ComponentCategory.SECURITY,
                relationships=[Relationship("r1", "c2", RelationType.DEPENDS_ON)],
            ),
        ],
        tags=["api"],
    )

    data = project.to_dict()
    assert data["todos"][0]["priority"] == "high"
    assert data["components"][0]["relationships"][0]["relation_type"] == "depends_on"

    restored = Project.from_dict(data)
    assert restored == project


def test_project_from_minimal_dict() -> None:
    """Test that missing collections default to empty."""
    project = Project.from_dict({"id": "p1", "name": "Empty", "owner_id": "bob"})
    assert project.todos == []
    assert project.components == []
    assert project.tags == []


def test_team_member_round_trip() -> None:
    """Test membership serialization."""
    member = TeamMember(project_id="p1", user_id="bob", role=Role.EDITOR)
    assert member.to_dict() == {"project_id": "p1", "user_id": "bob", "role": "editor"}
    assert TeamMember.from_dict(member.to_dict()) == member


def test_parsed_command_wizard_trigger() -> None:
    """Test wizard detection and text joining."""
    bare = ParsedCommand(CommandType.ADD_TODO, "add todo")
    assert bare.is_wizard_trigger

    with_args = ParsedCommand(CommandType.ADD_TODO, "add todo", args=["fix", "bug"])
    assert not with_args.is_wizard_trigger
    assert with_args.text == "fix bug"

    with_flags = ParsedCommand(CommandType.ADD_TODO, "add todo", flags={"title": "x"})
    assert not with_flags.is_wizard_trigger


def test_command_response_to_dict() -> None:
    """Test response serialization."""
    response = CommandResponse(type=ResponseType.ERROR, message="nope", suggestions=["/help"])
    assert response.is_error
    assert response.to_dict() == {
        "type": "error",
        "message": "nope",
        "data": None,
        "suggestions": ["/help"],
        "metadata": {},
    }


def test_batch_result_counts() -> None:
    """Test attempted and succeeded."""
    ok = CommandResponse(type=ResponseType.SUCCESS, message="ok")
    result = BatchResult(outcomes=[CommandOutcome(0, "/todos", ok)], total=3, stopped_at=None)
    assert result.attempted == 1
    assert result.succeeded

    result.stopped_at = 0
    assert not result.succeeded
