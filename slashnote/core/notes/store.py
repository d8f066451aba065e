"""Collaborators the note service persists through.

The command engine does not decide how notes and updates are stored.
These protocols describe what the note service needs, and the in-memory
implementations show how a consumer applies the update-set contract.
"""

import itertools
import logging
import threading
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from slashnote.config import settings
from slashnote.core.commands.updates import UpdateKey, UpdateSet
from slashnote.core.notes.models import Note
from slashnote.core.references.resolver import ReferenceResolver
from slashnote.core.todos.tracker import InMemoryTodoTracker, TodoTracker
from slashnote.core.workitems.models import ItemState, Project, User, WorkItem

logger = logging.getLogger(__name__)


@runtime_checkable
class NoteStore(Protocol):
    def save(self, note: Note) -> bool:
        """Persist a note, assigning its id. Returns True on success."""
        ...


@runtime_checkable
class WorkItemUpdater(Protocol):
    def apply(
        self, noteable: WorkItem, updates: UpdateSet, user: User, project: Project
    ) -> bool:
        """Apply an update-set to a work item. Returns True on success."""
        ...


class InMemoryNoteStore:
    """Keeps saved notes in a list, assigning increasing ids."""

    def __init__(self) -> None:
        self.notes: list[Note] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, note: Note) -> bool:
        with self._lock:
            note.id = next(self._ids)
            note.created_at = datetime.now(settings.tzinfo)
            self.notes.append(note)
        return True


STATE_EVENTS = {
    "close": ItemState.CLOSED,
    "reopen": ItemState.OPENED,
}


class InMemoryWorkItemUpdater:
    """Applies update-sets directly to work item objects.

    Label keys are applied in a fixed order regardless of the order they
    were written in: `label_ids` replaces first, then `remove_label_ids`,
    then `add_label_ids`. Unknown keys are ignored.

    Label ids are looked up through the same resolver the interpreter
    resolves `~label` mentions with, so an id the interpreter produced is
    always known here.

    Attributes:
        references: Source of the project's labels.
        todos: Tracker receiving todo events. Pass the interpreter's tracker
            so `/done` sees todos added by `/todo`.
    """

    def __init__(
        self, references: ReferenceResolver, todos: TodoTracker | None = None
    ) -> None:
        self.references = references
        self.todos = todos if todos is not None else InMemoryTodoTracker()

    def apply(
        self, noteable: WorkItem, updates: UpdateSet, user: User, project: Project
    ) -> bool:
        values: dict[str, Any] = updates.to_dict()

        state_event = values.get(UpdateKey.STATE_EVENT.value)
        if state_event in STATE_EVENTS:
            noteable.state = STATE_EVENTS[state_event]

        if UpdateKey.TITLE.value in values:
            noteable.title = values[UpdateKey.TITLE.value]
        if UpdateKey.ASSIGNEE_ID.value in values:
            noteable.assignee_id = values[UpdateKey.ASSIGNEE_ID.value]
        if UpdateKey.MILESTONE_ID.value in values:
            noteable.milestone_id = values[UpdateKey.MILESTONE_ID.value]

        self._apply_labels(noteable, values, project)

        todo_event = values.get(UpdateKey.TODO_EVENT.value)
        if todo_event == "add":
            self.todos.add(noteable, user)
        elif todo_event == "done":
            self.todos.mark_done(noteable, user)

        subscription_event = values.get(UpdateKey.SUBSCRIPTION_EVENT.value)
        if subscription_event == "subscribe":
            noteable.subscriber_ids.add(user.id)
        elif subscription_event == "unsubscribe":
            noteable.subscriber_ids.discard(user.id)

        if UpdateKey.DUE_DATE.value in values and noteable.supports_due_date:
            noteable.due_date = values[UpdateKey.DUE_DATE.value]  # type: ignore[attr-defined]

        logger.debug("Applied %s to %s %s", list(values), noteable.human_name, noteable.id)
        return True

    def _apply_labels(
        self, noteable: WorkItem, values: dict[str, Any], project: Project
    ) -> None:
        by_id = {label.id: label for label in self.references.list_labels(project.id)}
        labels = list(noteable.labels)

        if UpdateKey.LABEL_IDS.value in values:
            labels = [by_id[i] for i in values[UpdateKey.LABEL_IDS.value] if i in by_id]

        removed = set(values.get(UpdateKey.REMOVE_LABEL_IDS.value, []))
        labels = [label for label in labels if label.id not in removed]

        current = {label.id for label in labels}
        for label_id in values.get(UpdateKey.ADD_LABEL_IDS.value, []):
            if label_id in by_id and label_id not in current:
                labels.append(by_id[label_id])
                current.add(label_id)

        noteable.labels = labels
