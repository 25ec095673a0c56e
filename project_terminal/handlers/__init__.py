"""Command handlers for project terminal."""

from project_terminal.handlers.components import ComponentHandlers
from project_terminal.handlers.devlog import DevLogHandlers
from project_terminal.handlers.dispatcher import CommandDispatcher
from project_terminal.handlers.notes import NoteHandlers
from project_terminal.handlers.relationships import RelationshipHandlers
from project_terminal.handlers.stack import StackHandlers
from project_terminal.handlers.todos import TodoHandlers
from project_terminal.handlers.utility import UtilityHandlers

__all__ = [
    "CommandDispatcher",
    "ComponentHandlers",
    "DevLogHandlers",
    "NoteHandlers",
    "RelationshipHandlers",
    "StackHandlers",
    "TodoHandlers",
    "UtilityHandlers",
]
