"""Reference resolution for command arguments.

This module provides:
- ReferenceKind: user, label and milestone mentions with their sigils
- ReferenceResolver: protocol executors resolve tokens through
- ReferenceRepository: SQLite-backed resolver
"""

from slashnote.core.references.models import ReferenceKind
from slashnote.core.references.repository import (
    ReferenceRepository,
    get_repository,
)
from slashnote.core.references.resolver import ReferenceResolver

__all__ = [
    "ReferenceKind",
    "ReferenceRepository",
    "ReferenceResolver",
    "get_repository",
]
