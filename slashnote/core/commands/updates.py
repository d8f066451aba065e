# slashnote/core/commands/updates.py
"""Update-set builder filled by command executors.

The key vocabulary is fixed. Consumers treat `add_label_ids` and
`remove_label_ids` as incremental and `label_ids` as a full replacement.
"""

from collections.abc import Iterator
from enum import Enum
from typing import Any


class UpdateKey(str, Enum):
    """Fields a slash command can change on a work item."""

    STATE_EVENT = "state_event"
    TITLE = "title"
    ASSIGNEE_ID = "assignee_id"
    MILESTONE_ID = "milestone_id"
    ADD_LABEL_IDS = "add_label_ids"
    REMOVE_LABEL_IDS = "remove_label_ids"
    LABEL_IDS = "label_ids"
    TODO_EVENT = "todo_event"
    SUBSCRIPTION_EVENT = "subscription_event"
    DUE_DATE = "due_date"


class UpdateSet:
    """Mutable collection of field changes, last write wins per key.

    Example:
        >>> updates = UpdateSet()
        >>> updates.set(UpdateKey.TITLE, "A")
        >>> updates.set(UpdateKey.TITLE, "B")
        >>> updates.to_dict()
        {'title': 'B'}
    """

    def __init__(self) -> None:
        self._values: dict[UpdateKey, Any] = {}

    def set(self, key: UpdateKey | str, value: Any) -> None:
        """Record a value for a key, replacing any earlier one.

        Args:
            key: Update key or its string value.
            value: Intended value. None is a real value (clears the field).

        Raises:
            ValueError: If the key is not part of the vocabulary.
        """
        key = UpdateKey(key)
        # Re-insert so to_dict() reflects the order of the last writes
        self._values.pop(key, None)
        self._values[key] = value

    def merge(self, other: "UpdateSet") -> None:
        """Apply every value of another update-set on top of this one, in order."""
        for key, value in other._values.items():
            self.set(key, value)

    def get(self, key: UpdateKey | str, default: Any = None) -> Any:
        return self._values.get(UpdateKey(key), default)

    def __getitem__(self, key: UpdateKey | str) -> Any:
        return self._values[UpdateKey(key)]

    def __contains__(self, key: object) -> bool:
        try:
            return UpdateKey(key) in self._values
        except ValueError:
            return False

    def __iter__(self) -> Iterator[UpdateKey]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UpdateSet):
            return self._values == other._values
        if isinstance(other, dict):
            return self.to_dict() == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"UpdateSet({self.to_dict()!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping keyed by field name, in order of the last writes."""
        return {key.value: value for key, value in self._values.items()}
