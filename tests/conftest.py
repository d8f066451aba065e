# tests/conftest.py
"""Shared pytest fixtures for all test modules.

Provides common fixtures for:
- A temporary SQLite reference repository with users, labels and milestones
- A project, an issue and a merge request
- A permission policy, todo tracker and interpreter wired together
- Singleton reset for the reference repository
"""

from collections.abc import Generator
from datetime import date

import pytest

from slashnote.core.commands.executor import SlashCommandInterpreter
from slashnote.core.commands.models import CommandContext
from slashnote.core.dates.parser import parse_due_date
from slashnote.core.permissions.policy import Role, RolePermissionPolicy
from slashnote.core.references.repository import ReferenceRepository
from slashnote.core.todos.tracker import InMemoryTodoTracker
from slashnote.core.workitems.models import (
    Issue,
    Label,
    MergeRequest,
    Milestone,
    MilestoneState,
    Project,
    User,
)

# Fixed "today" for due date parsing (a Sunday)
TODAY = date(2026, 10, 18)


@pytest.fixture
def repo(tmp_path) -> ReferenceRepository:
    """Create a reference repository in a temporary directory."""
    return ReferenceRepository(db_path=str(tmp_path / "references.db"))


@pytest.fixture
def alice(repo: ReferenceRepository) -> User:
    """Project developer (id 1)."""
    return repo.add_user(User(id=0, username="alice", name="Alice"))


@pytest.fixture
def bob(repo: ReferenceRepository, alice: User) -> User:
    """Project guest (id 2)."""
    return repo.add_user(User(id=0, username="bob", name="Bob"))


@pytest.fixture
def project(repo: ReferenceRepository) -> Project:
    """Project 1, with labels bug(1), needs triage(2), feature(3) and
    milestones v2.0(1, active), v1.0(2, closed) stored in the repository."""
    repo.add_label(Label(id=0, title="bug", project_id=1))
    repo.add_label(Label(id=0, title="needs triage", project_id=1))
    repo.add_label(Label(id=0, title="feature", project_id=1))
    repo.add_milestone(Milestone(id=0, title="v2.0", project_id=1))
    repo.add_milestone(
        Milestone(id=0, title="v1.0", project_id=1, state=MilestoneState.CLOSED)
    )
    return Project(id=1, path="group/app")


@pytest.fixture
def labels(repo: ReferenceRepository, project: Project) -> list[Label]:
    return repo.list_labels(project.id)


@pytest.fixture
def milestones(repo: ReferenceRepository, project: Project) -> list[Milestone]:
    return repo.list_milestones(project.id)


@pytest.fixture
def policy(project: Project, alice: User, bob: User) -> RolePermissionPolicy:
    """Alice is a developer, Bob a guest."""
    policy = RolePermissionPolicy()
    policy.add_member(project, alice, Role.DEVELOPER)
    policy.add_member(project, bob, Role.GUEST)
    return policy


@pytest.fixture
def todos() -> InMemoryTodoTracker:
    return InMemoryTodoTracker()


@pytest.fixture
def interpreter(
    repo: ReferenceRepository,
    policy: RolePermissionPolicy,
    todos: InMemoryTodoTracker,
) -> SlashCommandInterpreter:
    """Interpreter over the built-in catalogue with a fixed today."""
    return SlashCommandInterpreter(
        resolver=repo,
        permissions=policy,
        todos=todos,
        date_parser=lambda text: parse_due_date(text, today=TODAY),
    )


@pytest.fixture
def issue(project: Project) -> Issue:
    """Open, persisted issue authored by someone else."""
    return Issue(id=10, project_id=project.id, author_id=99, title="Crash on save")


@pytest.fixture
def merge_request(project: Project) -> MergeRequest:
    return MergeRequest(
        id=20, project_id=project.id, author_id=99, title="Fix crash", source_branch="fix"
    )


@pytest.fixture
def context(issue: Issue, alice: User, project: Project) -> CommandContext:
    """Alice commenting on the issue."""
    return CommandContext(noteable=issue, current_user=alice, project=project)


@pytest.fixture
def reset_repository_singleton() -> Generator[None, None, None]:
    """Reset the ReferenceRepository singleton before and after test."""
    import slashnote.core.references.repository as repository_module

    repository_module._repository = None
    yield
    repository_module._repository = None
