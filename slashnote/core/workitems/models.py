# slashnote/core/workitems/models.py
"""Domain models for projects and the work items notes are attached to.

Issues and merge requests share the same capability surface (state
transitions, assignee, milestone, labels, subscriptions). Only issues
carry a due date.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class NoteableKind(str, Enum):
    """Variants of work item a note can be attached to."""

    ISSUE = "issue"
    MERGE_REQUEST = "merge_request"

    @property
    def human_name(self) -> str:
        """Lowercase display name, e.g. "merge request"."""
        return self.value.replace("_", " ")


class ItemState(str, Enum):
    """Lifecycle state of a work item."""

    OPENED = "opened"
    CLOSED = "closed"
    MERGED = "merged"


class MilestoneState(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass
class User:
    """A user account.

    Attributes:
        id: Unique identifier.
        username: Login name, referenced in notes as `@username`.
        name: Display name.
        admin: Instance administrators pass every permission check.
    """

    id: int
    username: str
    name: str = ""
    admin: bool = False


@dataclass
class Label:
    id: int
    title: str
    project_id: int


@dataclass
class Milestone:
    id: int
    title: str
    project_id: int
    state: MilestoneState = MilestoneState.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.state == MilestoneState.ACTIVE


@dataclass
class Project:
    """A project scoping labels, milestones and memberships.

    Its labels and milestones live in the reference store, keyed by the
    project id.

    Attributes:
        id: Unique identifier.
        path: Project path, e.g. "group/app".
    """

    id: int
    path: str


@dataclass
class WorkItem:
    """Common state of issues and merge requests.

    Attributes:
        id: Database id, None while the item has not been saved yet.
        project_id: Owning project.
        author_id: User who opened the item.
        title: Item title.
        state: Current lifecycle state.
        assignee_id: Assigned user, if any.
        milestone_id: Milestone the item is scheduled for, if any.
        labels: Labels currently applied.
        subscriber_ids: Users receiving notifications for this item.
    """

    id: int | None
    project_id: int
    author_id: int
    title: str = ""
    state: ItemState = ItemState.OPENED
    assignee_id: int | None = None
    milestone_id: int | None = None
    labels: list[Label] = field(default_factory=list)
    subscriber_ids: set[int] = field(default_factory=set)

    kind = NoteableKind.ISSUE

    @property
    def persisted(self) -> bool:
        return self.id is not None

    @property
    def is_open(self) -> bool:
        return self.state == ItemState.OPENED

    @property
    def is_closed(self) -> bool:
        return self.state == ItemState.CLOSED

    @property
    def has_assignee(self) -> bool:
        return self.assignee_id is not None

    @property
    def has_milestone(self) -> bool:
        return self.milestone_id is not None

    @property
    def has_labels(self) -> bool:
        return bool(self.labels)

    @property
    def supports_due_date(self) -> bool:
        return False

    @property
    def has_due_date(self) -> bool:
        return False

    @property
    def human_name(self) -> str:
        return self.kind.human_name

    def is_subscribed(self, user: User) -> bool:
        return user.id in self.subscriber_ids


@dataclass
class Issue(WorkItem):
    """An issue. The only work item with a due date."""

    due_date: date | None = None

    kind = NoteableKind.ISSUE

    @property
    def supports_due_date(self) -> bool:
        return True

    @property
    def has_due_date(self) -> bool:
        return self.due_date is not None


@dataclass
class MergeRequest(WorkItem):
    source_branch: str = ""
    target_branch: str = "main"

    kind = NoteableKind.MERGE_REQUEST
