# slashnote/core/notes/service.py
"""Note creation with slash command handling.

Commands are interpreted before anything is saved: a note made only of
commands is never persisted, but its commands still apply.
"""

import logging

from slashnote.core.commands.executor import SlashCommandInterpreter
from slashnote.core.commands.models import CommandContext
from slashnote.core.notes.models import Note, NoteParams
from slashnote.core.notes.store import (
    InMemoryNoteStore,
    InMemoryWorkItemUpdater,
    NoteStore,
    WorkItemUpdater,
)
from slashnote.core.workitems.models import Project, User
from slashnote.utils.logging import get_request_id, request_context

logger = logging.getLogger(__name__)

COMMANDS_ONLY_MESSAGE = "Your commands are being executed."


class NoteCreateService:
    """Creates notes and applies the commands they contain.

    Attributes:
        project: Project the note is created in.
        current_user: Author of the note.
        interpreter: Slash command interpreter.
        note_store: Where visible notes are persisted. Defaults to an
            InMemoryNoteStore.
        item_updater: Applies update-sets to work items. Defaults to an
            InMemoryWorkItemUpdater sharing the interpreter's reference
            resolver and todo tracker.

    Example:
        >>> service = NoteCreateService(project, alice, interpreter)
        >>> note = service.execute(NoteParams(note="/close", noteable=issue))
        >>> note.persisted, note.errors
        (False, {'commands_only': ['Your commands are being executed.']})
    """

    def __init__(
        self,
        project: Project,
        current_user: User,
        interpreter: SlashCommandInterpreter,
        note_store: NoteStore | None = None,
        item_updater: WorkItemUpdater | None = None,
    ) -> None:
        self.project = project
        self.current_user = current_user
        self.interpreter = interpreter
        self.note_store = note_store if note_store is not None else InMemoryNoteStore()
        if item_updater is None:
            item_updater = InMemoryWorkItemUpdater(
                interpreter.resolver, todos=interpreter.todos
            )
        self.item_updater = item_updater

    def execute(self, params: NoteParams) -> Note:
        """Create a note from submitted parameters.

        Args:
            params: Note body and the work item it is attached to.

        Returns:
            The note. It is persisted only if text remains after command
            lines are removed. A commands-only submission carries a
            "commands_only" error entry instead.
        """
        with request_context(get_request_id() or None):
            return self._execute(params)

    def _execute(self, params: NoteParams) -> Note:
        noteable = params.noteable
        note = Note(
            id=None,
            note=params.note,
            noteable=noteable,
            author=self.current_user,
            project=self.project,
        )

        context = CommandContext(
            noteable=noteable, current_user=self.current_user, project=self.project
        )
        content, updates = self.interpreter.interpret(params.note, context)
        note.note = content

        if not note.is_blank:
            if self.note_store.save(note):
                logger.info("Saved note %s on %s %s", note.id, noteable.human_name, noteable.id)
            else:
                logger.warning("Failed to save note on %s %s", noteable.human_name, noteable.id)

        applied = bool(updates) and self.item_updater.apply(
            noteable, updates, self.current_user, self.project
        )

        if applied and note.is_blank:
            note.add_error("commands_only", COMMANDS_ONLY_MESSAGE)

        return note
