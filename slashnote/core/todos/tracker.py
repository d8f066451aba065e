"""Todo tracking interface and an in-memory implementation."""

import threading
from typing import Protocol, runtime_checkable

from slashnote.core.workitems.models import User, WorkItem


@runtime_checkable
class TodoTracker(Protocol):
    """Pending todos per user and work item.

    Conditions only read through `todo_exists`; `add` and `mark_done` are
    called by whatever applies the update-set.
    """

    def todo_exists(self, noteable: WorkItem, user: User) -> bool:
        ...

    def add(self, noteable: WorkItem, user: User) -> None:
        ...

    def mark_done(self, noteable: WorkItem, user: User) -> bool:
        ...


class InMemoryTodoTracker:
    """Pending todos kept in a set of (item kind, item id, user id) keys.

    Example:
        >>> todos = InMemoryTodoTracker()
        >>> todos.add(issue, alice)
        >>> todos.todo_exists(issue, alice)
        True
    """

    def __init__(self) -> None:
        self._pending: set[tuple[str, int | None, int]] = set()
        self._lock = threading.Lock()

    @staticmethod
    def _key(noteable: WorkItem, user: User) -> tuple[str, int | None, int]:
        return (noteable.kind.value, noteable.id, user.id)

    def add(self, noteable: WorkItem, user: User) -> None:
        with self._lock:
            self._pending.add(self._key(noteable, user))

    def mark_done(self, noteable: WorkItem, user: User) -> bool:
        """Resolve a pending todo.

        Returns:
            True if a todo was pending, False otherwise.
        """
        with self._lock:
            key = self._key(noteable, user)
            if key not in self._pending:
                return False
            self._pending.discard(key)
            return True

    def todo_exists(self, noteable: WorkItem, user: User) -> bool:
        if not noteable.persisted:
            return False
        with self._lock:
            return self._key(noteable, user) in self._pending
