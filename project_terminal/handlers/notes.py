"""Note command handlers."""

import structlog

from project_terminal.handlers.base import BaseHandler, is_confirmed, wizard_field
from project_terminal.models import CommandResponse, Note, ParsedCommand, Project, new_id, utc_now
from project_terminal.parser import flag_text
from project_terminal.resolver import require_entity

logger = structlog.get_logger()

PREVIEW_LENGTH = 100


def _preview(content: str) -> str:
    if len(content) <= PREVIEW_LENGTH:
        return content
    return content[:PREVIEW_LENGTH].rstrip() + "..."


class NoteHandlers(BaseHandler):
    """Handlers for project notes."""

    def _find_note(self, project: Project, identifier: str) -> Note:
        return require_entity(project.notes, identifier, "Note", suggestions=["/view notes"])

    def add_note(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.is_wizard_trigger:
            return self.prompt(
                "Add New Note",
                project,
                "add_note",
                [
                    wizard_field("title", "Title", required=True),
                    wizard_field("description", "Description"),
                    wizard_field("content", "Content", "textarea", required=True),
                ],
            )

        title = (flag_text(parsed.flags, "title") or parsed.text).strip()
        if not title:
            return self.error("Note title is required", ['/add note --title="API decisions" --content="..."'])

        note = Note(
            id=new_id(),
            title=title,
            content=flag_text(parsed.flags, "content") or "",
            description=flag_text(parsed.flags, "description", "desc") or "",
        )
        project.notes.append(note)
        self.commit(project)

        logger.info("Note added", project_id=project.id, note_id=note.id)
        return self.success(f'Added note: "{note.title}"', project, "add_note", {"note": {"id": note.id}})

    def view_notes(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.args:
            note = self._find_note(project, parsed.text)
            return self.data(
                f'Note: "{note.title}"',
                project,
                "view_note",
                {
                    "note": {
                        "id": note.id,
                        "title": note.title,
                        "description": note.description,
                        "content": note.content,
                        "updated_at": note.updated_at,
                    }
                },
            )

        if not project.notes:
            return self.info(f"No notes in {project.name}", ["/add note"])
        return self.data(
            f"Notes in {project.name} ({len(project.notes)})",
            project,
            "view_notes",
            {
                "notes": [
                    {"index": i, "id": n.id, "title": n.title, "preview": _preview(n.content)}
                    for i, n in enumerate(project.notes, 1)
                ]
            },
        )

    def edit_note(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            if not project.notes:
                return self.info("No notes to edit", ["/add note"])
            return self.prompt(
                "Select Note to Edit",
                project,
                "edit_note_selector",
                [
                    wizard_field(
                        "note",
                        "Note",
                        "select",
                        required=True,
                        options=[{"value": n.id, "label": n.title} for n in project.notes],
                    )
                ],
            )

        note = self._find_note(project, parsed.args[0])
        title = flag_text(parsed.flags, "title")
        content = flag_text(parsed.flags, "content")
        description = flag_text(parsed.flags, "description", "desc")
        if title is None and content is None and description is None:
            return self.prompt(
                f'Edit Note: "{note.title}"',
                project,
                "edit_note",
                [
                    wizard_field("title", "Title", required=True, value=note.title),
                    wizard_field("description", "Description", value=note.description),
                    wizard_field("content", "Content", "textarea", required=True, value=note.content),
                ],
                note_id=note.id,
            )

        if title is not None:
            if not title.strip():
                return self.error("Note title cannot be empty")
            note.title = title.strip()
        if content is not None:
            note.content = content
        if description is not None:
            note.description = description
        note.updated_at = utc_now()
        self.commit(project)
        return self.success(f'Updated note: "{note.title}"', project, "edit_note")

    def delete_note(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            return self.error("Usage: /delete note [#|id|title] --confirm", ["/view notes"])

        note = self._find_note(project, parsed.text)
        if not is_confirmed(parsed):
            return self.confirm(
                f'Delete note "{note.title}"?',
                project,
                "delete_note_confirm",
                f"/delete note {note.id} --confirm",
            )

        project.notes = [n for n in project.notes if n.id != note.id]
        self.commit(project)
        return self.success(f'Deleted note: "{note.title}"', project, "delete_note")
