# slashnote/core/lifecycle.py
"""Application startup wiring.

Configures logging and observability from settings and assembles the
default interpreter. The command registry itself is built at import time,
so a broken catalogue fails here at the latest, never on a request.

Example:
    >>> from slashnote.core.lifecycle import startup
    >>> interpreter = startup()
    >>> content, updates = interpreter.interpret(text, context)
"""

import logging

from slashnote.config import settings
from slashnote.core.commands.definitions import registry
from slashnote.core.commands.executor import SlashCommandInterpreter
from slashnote.core.permissions.policy import PermissionOracle, RolePermissionPolicy
from slashnote.core.references.repository import get_repository
from slashnote.core.references.resolver import ReferenceResolver
from slashnote.core.todos.tracker import TodoTracker
from slashnote.utils.logging import configure_structured_logging
from slashnote.utils.observability import setup_logfire

logger = logging.getLogger(__name__)


def startup(
    resolver: ReferenceResolver | None = None,
    permissions: PermissionOracle | None = None,
    todos: TodoTracker | None = None,
) -> SlashCommandInterpreter:
    """Configure the application and return a ready interpreter.

    Args:
        resolver: Reference resolver. Defaults to the SQLite repository at
            the configured reference_db_path.
        permissions: Permission oracle. Defaults to an empty role policy,
            under which only instance admins may run gated commands.
        todos: Todo tracker. Defaults to an in-memory tracker. A
            NoteCreateService built on the returned interpreter applies todo
            events to this same tracker unless given its own updater.

    Returns:
        SlashCommandInterpreter using the built-in command catalogue.
    """
    if settings.structured_logging:
        configure_structured_logging(settings.log_level.upper())
    else:
        logging.basicConfig(level=settings.log_level.upper())

    setup_logfire()

    interpreter = SlashCommandInterpreter(
        resolver=resolver if resolver is not None else get_repository(),
        permissions=permissions if permissions is not None else RolePermissionPolicy(),
        registry=registry,
        todos=todos,
    )
    logger.info(
        "Slash commands ready: %s",
        ", ".join(f"/{definition.name}" for definition in registry.all_definitions()),
    )
    return interpreter
