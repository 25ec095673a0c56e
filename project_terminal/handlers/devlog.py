"""Dev log command handlers."""

import structlog

from project_terminal.handlers.base import BaseHandler, is_confirmed, wizard_field
from project_terminal.models import CommandResponse, DevLogEntry, ParsedCommand, Project, new_id
from project_terminal.parser import flag_text
from project_terminal.resolver import require_entity

logger = structlog.get_logger()


class DevLogHandlers(BaseHandler):
    def _find_entry(self, project: Project, identifier: str) -> DevLogEntry:
        return require_entity(project.dev_log, identifier, "Dev log entry", suggestions=["/view devlog"])

    def add_devlog(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if parsed.is_wizard_trigger:
            return self.prompt(
                "Add Dev Log Entry",
                project,
                "add_devlog",
                [
                    wizard_field("title", "Title"),
                    wizard_field("description", "Entry", "textarea", required=True),
                ],
            )

        description = (flag_text(parsed.flags, "description", "desc") or parsed.text).strip()
        title = (flag_text(parsed.flags, "title") or "").strip()
        if not description and not title:
            return self.error("Dev log entry text is required", ["/add devlog fixed memory leak in user service"])

        entry = DevLogEntry(id=new_id(), title=title, description=description)
        project.dev_log.append(entry)
        self.commit(project)

        logger.info("Dev log entry added", project_id=project.id, entry_id=entry.id)
        return self.success(f'Added dev log entry: "{entry.label}"', project, "add_devlog")

    def view_devlog(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not project.dev_log:
            return self.info(f"No dev log entries in {project.name}", ["/add devlog"])

        entries = [
            {"index": i, "id": e.id, "title": e.title, "description": e.description, "date": e.date}
            for i, e in enumerate(project.dev_log, 1)
        ]
        return self.data(
            f"Dev log for {project.name} ({len(entries)} entries)",
            project,
            "view_devlog",
            {"entries": entries},
        )

    def edit_devlog(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            if not project.dev_log:
                return self.info("No dev log entries to edit", ["/add devlog"])
            return self.prompt(
                "Select Dev Log Entry to Edit",
                project,
                "edit_devlog_selector",
                [
                    wizard_field(
                        "entry",
                        "Entry",
                        "select",
                        required=True,
                        options=[{"value": e.id, "label": e.label} for e in project.dev_log],
                    )
                ],
            )

        entry = self._find_entry(project, parsed.args[0])
        title = flag_text(parsed.flags, "title")
        description = flag_text(parsed.flags, "description", "desc")
        if title is None and description is None:
            return self.prompt(
                f'Edit Dev Log Entry: "{entry.label}"',
                project,
                "edit_devlog",
                [
                    wizard_field("title", "Title", value=entry.title),
                    wizard_field("description", "Entry", "textarea", required=True, value=entry.description),
                ],
                entry_id=entry.id,
            )

        if title is not None:
            entry.title = title.strip()
        if description is not None:
            entry.description = description.strip()
        if not entry.label:
            return self.error("Dev log entry cannot be empty")
        self.commit(project)
        return self.success(f'Updated dev log entry: "{entry.label}"', project, "edit_devlog")

    def delete_devlog(self, parsed: ParsedCommand, project: Project) -> CommandResponse:
        if not parsed.args:
            return self.error("Usage: /delete devlog [#|id|title] --confirm", ["/view devlog"])

        entry = self._find_entry(project, parsed.text)
        if not is_confirmed(parsed):
            return self.confirm(
                f'Delete dev log entry "{entry.label}"?',
                project,
                "delete_devlog_confirm",
                f"/delete devlog {entry.id} --confirm",
            )

        project.dev_log = [e for e in project.dev_log if e.id != entry.id]
        self.commit(project)
        return self.success(f'Deleted dev log entry: "{entry.label}"', project, "delete_devlog")
