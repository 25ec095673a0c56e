"""Data models for project terminal."""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from project_terminal.commands import CommandType


def new_id() -> str:
    """Mint an opaque entity id."""
    return str(uuid.uuid4())


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


class Role(str, Enum):
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"


class RelationType(str, Enum):
    USES = "uses"
    DEPENDS_ON = "depends_on"


class ComponentCategory(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    DATABASE = "database"
    INFRASTRUCTURE = "infrastructure"
    SECURITY = "security"
    API = "api"
    DOCUMENTATION = "documentation"
    ASSET = "asset"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TodoStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class ResponseType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"
    DATA = "data"
    PROMPT = "prompt"


@dataclass
class Todo:
    """A todo item; subtasks are todos with a parent."""

    id: str
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    status: TodoStatus = TodoStatus.NOT_STARTED
    completed: bool = False
    parent_todo_id: str | None = None
    due_date: str | None = None
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return self.title

    @property
    def is_subtask(self) -> bool:
        return self.parent_todo_id is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Todo":
        data = dict(data)
        data["priority"] = Priority(data.get("priority", Priority.MEDIUM))
        data["status"] = TodoStatus(data.get("status", TodoStatus.NOT_STARTED))
        return cls(**data)


@dataclass
class Note:
    """A free-form project note."""

    id: str
    title: str
    content: str = ""
    description: str = ""
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return self.title

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        return cls(**data)


@dataclass
class DevLogEntry:
    """A dated development log entry."""

    id: str
    title: str = ""
    description: str = ""
    date: str = field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return self.title or self.description

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DevLogEntry":
        return cls(**data)


@dataclass
class Relationship:
    """One side of a bidirectional component relationship.

    Both sides share ``id``; ``target_id`` always names the *other* component.
    """

    id: str
    target_id: str
    relation_type: RelationType = RelationType.USES
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Relationship":
        data = dict(data)
        data["relation_type"] = RelationType(data.get("relation_type", RelationType.USES))
        return cls(**data)


@dataclass
class Component:
    """A documented piece of a project's architecture."""

    id: str
    title: str
    category: ComponentCategory = ComponentCategory.BACKEND
    type: str = ""
    content: str = ""
    feature: str = ""
    relationships: list[Relationship] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return self.title

    def touch(self) -> None:
        self.updated_at = utc_now()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Component":
        data = dict(data)
        data["category"] = ComponentCategory(data.get("category", ComponentCategory.BACKEND))
        data["relationships"] = [Relationship.from_dict(r) for r in data.get("relationships") or []]
        return cls(**data)


@dataclass
class StackItem:
    """A technology or package in the project's stack."""

    id: str
    name: str
    category: str = "tooling"
    version: str = ""
    description: str = ""

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StackItem":
        return cls(**data)


@dataclass
class Project:
    """The persisted project aggregate. Saved as one document."""

    id: str
    name: str
    owner_id: str
    description: str = ""
    todos: list[Todo] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    dev_log: list[DevLogEntry] = field(default_factory=list)
    components: list[Component] = field(default_factory=list)
    stack: list[StackItem] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    is_archived: bool = False
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        data = dict(data)
        data["todos"] = [Todo.from_dict(t) for t in data.get("todos") or []]
        data["notes"] = [Note.from_dict(n) for n in data.get("notes") or []]
        data["dev_log"] = [DevLogEntry.from_dict(e) for e in data.get("dev_log") or []]
        data["components"] = [Component.from_dict(c) for c in data.get("components") or []]
        data["stack"] = [StackItem.from_dict(s) for s in data.get("stack") or []]
        data["tags"] = list(data.get("tags") or [])
        return cls(**data)


@dataclass
class TeamMember:
    """A user's membership in a project they do not own."""

    project_id: str
    user_id: str
    role: Role = Role.VIEWER

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeamMember":
        return cls(project_id=data["project_id"], user_id=data["user_id"], role=Role(data.get("role", Role.VIEWER)))


@dataclass(frozen=True)
class ProjectSummary:
    """Cached shadow of a project. Never used for permission decisions."""

    id: str
    name: str
    owner_id: str
    role: Role
    is_archived: bool = False
    updated_at: str = ""


@dataclass
class ParsedCommand:
    """One command line after tokenizing."""

    command_type: "CommandType"
    raw_command_text: str
    args: list[str] = field(default_factory=list)
    flags: dict[str, str | bool | int] = field(default_factory=dict)
    project_mention: str | None = None
    raw: str = ""

    @property
    def is_wizard_trigger(self) -> bool:
        """No args and no flags: the caller should start an interactive wizard."""
        return not self.args and not self.flags

    @property
    def text(self) -> str:
        """Positional args joined back into free text."""
        return " ".join(self.args).strip()


@dataclass
class CommandResponse:
    """Structured result of a single command."""

    type: ResponseType
    message: str
    data: dict[str, Any] | None = None
    suggestions: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.type == ResponseType.ERROR

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class CommandOutcome:
    """The response recorded for one command of a batch."""

    index: int
    command: str
    response: CommandResponse

    @property
    def is_error(self) -> bool:
        return self.response.is_error


@dataclass
class BatchResult:
    """Ordered outcomes of a batch up to and including the stopping point."""

    outcomes: list[CommandOutcome] = field(default_factory=list)
    total: int = 0
    stopped_at: int | None = None
    error: Exception | None = None

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.stopped_at is None
