# slashnote/core/permissions/policy.py
"""Permission oracle interface and a role-based implementation.

The command engine only asks questions; it never decides the permission
model. RolePermissionPolicy is a small project-membership model suitable
for embedding and tests.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol, runtime_checkable

from slashnote.core.permissions.abilities import Ability
from slashnote.core.workitems.models import Project, User, WorkItem

logger = logging.getLogger(__name__)


@runtime_checkable
class PermissionOracle(Protocol):
    """Answers whether a user holds an ability on a subject.

    Implementations must be side-effect free and cheap enough to call once
    per command per note.
    """

    def can(self, user: User, ability: Ability, subject: WorkItem | Project) -> bool:
        """Return True if the user holds the ability on the subject."""
        ...


class Role(IntEnum):
    """Project membership roles, ordered by access level."""

    GUEST = 10
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40


ROLE_ABILITIES: dict[Role, frozenset[Ability]] = {
    Role.GUEST: frozenset(),
    Role.REPORTER: frozenset({Ability.UPDATE_ISSUE, Ability.ADMIN_ISSUE}),
    Role.DEVELOPER: frozenset(Ability),
    Role.MAINTAINER: frozenset(Ability),
}

# Abilities an author holds on their own item regardless of role
AUTHOR_ABILITIES: frozenset[Ability] = frozenset(
    {Ability.UPDATE_ISSUE, Ability.UPDATE_MERGE_REQUEST}
)


@dataclass
class RolePermissionPolicy:
    """Membership-based permission oracle.

    Attributes:
        memberships: Role of each user per project, keyed by project id
            then user id.
        log_denials: If True, log every denied check at debug level.
    """

    memberships: dict[int, dict[int, Role]] = field(default_factory=dict)
    log_denials: bool = True

    def add_member(self, project: Project, user: User, role: Role) -> None:
        self.memberships.setdefault(project.id, {})[user.id] = role

    def role_of(self, user: User, project_id: int) -> Role | None:
        return self.memberships.get(project_id, {}).get(user.id)

    def can(self, user: User, ability: Ability, subject: WorkItem | Project) -> bool:
        """Check an ability against a work item or a project.

        Instance admins hold every ability. Members get the abilities of
        their role. Members who authored a work item may also update it.

        Args:
            user: Acting user.
            ability: Ability being checked.
            subject: Work item or project the ability applies to.

        Returns:
            True if allowed.
        """
        if user.admin:
            return True

        project_id = subject.id if isinstance(subject, Project) else subject.project_id
        role = self.role_of(user, project_id)

        allowed = role is not None and (
            ability in ROLE_ABILITIES[role]
            or (
                isinstance(subject, WorkItem)
                and subject.author_id == user.id
                and ability in AUTHOR_ABILITIES
            )
        )

        if not allowed and self.log_denials:
            logger.debug(
                "Denied %s for user %s on project %s",
                ability.value,
                user.username,
                project_id,
            )
        return allowed
