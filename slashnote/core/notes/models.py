# slashnote/core/notes/models.py
"""Note data model and the parameters of a note submission."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field, InstanceOf

from slashnote.core.workitems.models import Project, User, WorkItem


class NoteParams(BaseModel):
    """Parameters of a submitted note.

    Attributes:
        note: Raw note body, possibly containing slash commands.
        noteable: Work item the note is attached to.
    """

    note: str = Field("", description="Note body as typed by the user")
    noteable: InstanceOf[WorkItem] = Field(
        ..., description="Issue or merge request being commented on"
    )


@dataclass
class Note:
    """A note on a work item.

    Attributes:
        id: Assigned by the store once saved, None before.
        note: Visible text, with command lines removed.
        noteable: Work item the note is attached to.
        author: User who wrote the note.
        project: Project of the work item.
        system: True for notes generated by the system.
        created_at: When the note was saved.
        errors: Messages keyed by field, e.g. "commands_only".
    """

    id: int | None
    note: str
    noteable: WorkItem
    author: User
    project: Project
    system: bool = False
    created_at: datetime | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def persisted(self) -> bool:
        return self.id is not None

    @property
    def is_blank(self) -> bool:
        return not self.note.strip()

    def add_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, []).append(message)
