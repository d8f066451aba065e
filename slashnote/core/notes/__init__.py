"""Note creation: interpret commands, then persist whatever text remains.

This module provides:
- Note, NoteParams: note model and submission parameters
- NoteStore, WorkItemUpdater: persistence collaborators
- InMemoryNoteStore, InMemoryWorkItemUpdater: in-process implementations
- NoteCreateService: the orchestrator
"""

from slashnote.core.notes.models import Note, NoteParams
from slashnote.core.notes.service import COMMANDS_ONLY_MESSAGE, NoteCreateService
from slashnote.core.notes.store import (
    InMemoryNoteStore,
    InMemoryWorkItemUpdater,
    NoteStore,
    WorkItemUpdater,
)

__all__ = [
    "COMMANDS_ONLY_MESSAGE",
    "InMemoryNoteStore",
    "InMemoryWorkItemUpdater",
    "Note",
    "NoteCreateService",
    "NoteParams",
    "NoteStore",
    "WorkItemUpdater",
]
