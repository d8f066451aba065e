"""Reference resolver interface used by command executors and conditions."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from slashnote.core.references.models import ReferenceKind
from slashnote.core.workitems.models import Label, Milestone, Project, User


@runtime_checkable
class ReferenceResolver(Protocol):
    """Source of truth for the users, labels and milestones notes can mention.

    Command conditions ask it whether a project has labels or an active
    milestone, and executors resolve argument tokens through it, so both
    always agree.
    """

    def resolve(
        self,
        text: str,
        kind: ReferenceKind,
        project: Project,
        user: User | None = None,
    ) -> Sequence[User | Label | Milestone]:
        """Return matching entities in a stable order, empty if none match."""
        ...

    def list_labels(self, project_id: int) -> Sequence[Label]:
        """Return every label of the project."""
        ...

    def list_milestones(self, project_id: int) -> Sequence[Milestone]:
        """Return every milestone of the project, in any state."""
        ...
