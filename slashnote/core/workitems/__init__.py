"""Work item domain: projects, users, labels, milestones, issues, merge requests."""

from slashnote.core.workitems.models import (
    Issue,
    ItemState,
    Label,
    MergeRequest,
    Milestone,
    MilestoneState,
    NoteableKind,
    Project,
    User,
    WorkItem,
)

__all__ = [
    "Issue",
    "ItemState",
    "Label",
    "MergeRequest",
    "Milestone",
    "MilestoneState",
    "NoteableKind",
    "Project",
    "User",
    "WorkItem",
]
