# slashnote/core/permissions/abilities.py
"""Abilities checked by command conditions.

Each work item kind has its own update/admin ability. Commands ask for an
Action and the kind of the item they run on; `ability_for` maps the pair
to the concrete Ability through a lookup table.
"""

from enum import Enum

from slashnote.core.workitems.models import NoteableKind


class Action(str, Enum):
    """What a command wants to do with a work item.

    UPDATE covers editing the item itself (state, title, due date) and is
    checked against the item. ADMIN covers project-level metadata such as
    assignee, milestone and labels, and is checked against the project.
    """

    UPDATE = "update"
    ADMIN = "admin"


class Ability(str, Enum):
    UPDATE_ISSUE = "update_issue"
    ADMIN_ISSUE = "admin_issue"
    UPDATE_MERGE_REQUEST = "update_merge_request"
    ADMIN_MERGE_REQUEST = "admin_merge_request"


ABILITY_MAP: dict[tuple[NoteableKind, Action], Ability] = {
    (NoteableKind.ISSUE, Action.UPDATE): Ability.UPDATE_ISSUE,
    (NoteableKind.ISSUE, Action.ADMIN): Ability.ADMIN_ISSUE,
    (NoteableKind.MERGE_REQUEST, Action.UPDATE): Ability.UPDATE_MERGE_REQUEST,
    (NoteableKind.MERGE_REQUEST, Action.ADMIN): Ability.ADMIN_MERGE_REQUEST,
}


def ability_for(kind: NoteableKind, action: Action) -> Ability:
    """Look up the ability guarding an action on a kind of work item.

    Args:
        kind: Work item variant.
        action: Requested action.

    Returns:
        The matching Ability.

    Raises:
        KeyError: If the pair has no ability (a catalogue bug).
    """
    return ABILITY_MAP[(kind, action)]
