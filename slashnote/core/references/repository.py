# slashnote/core/references/repository.py
"""SQLite repository resolving mention tokens to users, labels and milestones.

This module stores the entities commands can reference and resolves
argument tokens (`@alice`, `~bug`, `%"v2.0"`) against them using direct
sqlite3. Labels and milestones are scoped to a project; users are global.
"""

import logging
import os
import sqlite3

from slashnote.core.references.models import ReferenceKind
from slashnote.core.workitems.models import (
    Label,
    Milestone,
    MilestoneState,
    Project,
    User,
)

logger = logging.getLogger(__name__)

Entity = User | Label | Milestone


class ReferenceRepository:
    """Repository for storing and resolving referenceable entities.

    The repository auto-creates the database directory and tables on
    initialization. Matching is case-insensitive and tolerates a leading
    sigil on the token.

    Attributes:
        db_path: Path to the SQLite database file.

    Example:
        >>> repo = ReferenceRepository(db_path="data/references.db")
        >>> repo.add_label(Label(id=0, title="bug", project_id=1))
        >>> [label.title for label in repo.resolve("~bug", ReferenceKind.LABEL, project)]
        ['bug']
    """

    def __init__(self, db_path: str = "data/references.db") -> None:
        """Initialize the ReferenceRepository.

        Creates the database directory and tables if they don't exist.
        Enables WAL mode for better concurrent access.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path

        # Create directory if it doesn't exist
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._init_db()

    def _init_db(self) -> None:
        """Create the users, labels and milestones tables and enable WAL mode."""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT UNIQUE NOT NULL COLLATE NOCASE,
                    name TEXT NOT NULL,
                    admin INTEGER NOT NULL DEFAULT 0
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS labels (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    project_id INTEGER NOT NULL,
                    title TEXT NOT NULL COLLATE NOCASE,
                    UNIQUE (project_id, title)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS milestones (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    project_id INTEGER NOT NULL,
                    title TEXT NOT NULL COLLATE NOCASE,
                    state TEXT NOT NULL,
                    UNIQUE (project_id, title)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def add_user(self, user: User) -> User:
        """Store a user. The id field is ignored and assigned by the database.

        Raises:
            sqlite3.IntegrityError: If the username is taken.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(
                "INSERT INTO users (username, name, admin) VALUES (?, ?, ?)",
                (user.username, user.name, int(user.admin)),
            )
            conn.commit()
            return User(
                id=cursor.lastrowid,
                username=user.username,
                name=user.name,
                admin=user.admin,
            )
        finally:
            conn.close()

    def add_label(self, label: Label) -> Label:
        """Store a project label.

        Raises:
            sqlite3.IntegrityError: If the project already has that title.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(
                "INSERT INTO labels (project_id, title) VALUES (?, ?)",
                (label.project_id, label.title),
            )
            conn.commit()
            return Label(id=cursor.lastrowid, title=label.title, project_id=label.project_id)
        finally:
            conn.close()

    def add_milestone(self, milestone: Milestone) -> Milestone:
        """Store a project milestone.

        Raises:
            sqlite3.IntegrityError: If the project already has that title.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(
                "INSERT INTO milestones (project_id, title, state) VALUES (?, ?, ?)",
                (milestone.project_id, milestone.title, milestone.state.value),
            )
            conn.commit()
            return Milestone(
                id=cursor.lastrowid,
                title=milestone.title,
                project_id=milestone.project_id,
                state=milestone.state,
            )
        finally:
            conn.close()

    def list_labels(self, project_id: int) -> list[Label]:
        conn = sqlite3.connect(self.db_path)
        try:
            rows = conn.execute(
                "SELECT id, title, project_id FROM labels WHERE project_id = ? ORDER BY id",
                (project_id,),
            ).fetchall()
            return [Label(id=row[0], title=row[1], project_id=row[2]) for row in rows]
        finally:
            conn.close()

    def list_milestones(self, project_id: int) -> list[Milestone]:
        conn = sqlite3.connect(self.db_path)
        try:
            rows = conn.execute(
                "SELECT id, title, project_id, state FROM milestones "
                "WHERE project_id = ? ORDER BY id",
                (project_id,),
            ).fetchall()
            return [self._row_to_milestone(row) for row in rows]
        finally:
            conn.close()

    def _row_to_milestone(self, row: tuple) -> Milestone:
        return Milestone(
            id=row[0],
            title=row[1],
            project_id=row[2],
            state=MilestoneState(row[3]),
        )

    def resolve(
        self,
        text: str,
        kind: ReferenceKind,
        project: Project,
        user: User | None = None,
    ) -> list[Entity]:
        """Resolve a mention token to matching entities.

        Users match on username, labels and milestones on title within the
        project. Only active milestones can be referenced.

        Args:
            text: Token such as "@alice", "~bug", "v2.0".
            kind: Kind of entity to look for.
            project: Project scoping labels and milestones.
            user: Acting user. Accepted for interface compatibility; every
                stored entity is visible to every user.

        Returns:
            Matching entities in id order, empty if none match.
        """
        token = kind.strip_sigil(text.strip())
        if not token:
            return []

        conn = sqlite3.connect(self.db_path)
        try:
            if kind == ReferenceKind.USER:
                rows = conn.execute(
                    "SELECT id, username, name, admin FROM users "
                    "WHERE username = ? ORDER BY id",
                    (token,),
                ).fetchall()
                found: list[Entity] = [
                    User(id=row[0], username=row[1], name=row[2], admin=bool(row[3]))
                    for row in rows
                ]
            elif kind == ReferenceKind.LABEL:
                rows = conn.execute(
                    "SELECT id, title, project_id FROM labels "
                    "WHERE project_id = ? AND title = ? ORDER BY id",
                    (project.id, token),
                ).fetchall()
                found = [Label(id=row[0], title=row[1], project_id=row[2]) for row in rows]
            else:
                rows = conn.execute(
                    "SELECT id, title, project_id, state FROM milestones "
                    "WHERE project_id = ? AND title = ? AND state = ? ORDER BY id",
                    (project.id, token, MilestoneState.ACTIVE.value),
                ).fetchall()
                found = [self._row_to_milestone(row) for row in rows]
        finally:
            conn.close()

        logger.debug("Resolved %s %r to %d match(es)", kind.value, token, len(found))
        return found


_repository: ReferenceRepository | None = None


def get_repository(db_path: str | None = None) -> ReferenceRepository:
    """Get the singleton ReferenceRepository instance.

    Args:
        db_path: Path to SQLite database (only used on first call). Defaults
            to the configured reference_db_path.

    Returns:
        ReferenceRepository singleton instance.
    """
    global _repository
    if _repository is None:
        if db_path is None:
            from slashnote.config import settings

            db_path = settings.reference_db_path
        _repository = ReferenceRepository(db_path=db_path)
    return _repository
