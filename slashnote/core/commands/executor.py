# slashnote/core/commands/executor.py
"""Slash command interpreter.

This module provides the SlashCommandInterpreter class which extracts
commands from note text, checks each one's condition against the context,
and runs the applicable ones into a single update-set.
"""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from slashnote.core.commands.models import CommandContext, Invocation
from slashnote.core.commands.parser import CommandExtractor
from slashnote.core.commands.registry import CommandRegistry
from slashnote.core.commands.updates import UpdateSet
from slashnote.core.dates.parser import DateParser, parse_due_date
from slashnote.core.permissions.abilities import Action, ability_for
from slashnote.core.permissions.policy import PermissionOracle
from slashnote.core.references.models import ReferenceKind
from slashnote.core.references.resolver import ReferenceResolver
from slashnote.core.todos.tracker import InMemoryTodoTracker, TodoTracker

logger = logging.getLogger(__name__)


class SlashCommandInterpreter:
    """Turns note text into remaining content plus an update-set.

    Interpretation is fail-soft per command: unknown commands, commands
    whose condition does not hold, unresolvable arguments and errors raised
    inside a single command never stop the other commands from applying.

    Attributes:
        registry: Commands recognized in notes.
        resolver: Resolves user, label and milestone mentions, and lists a
            project's labels and milestones for conditions.
        permissions: Answers ability checks made by conditions.
        todos: Tells whether the user has a pending todo on the item.
        date_parser: Parses due date expressions.

    Example:
        >>> interpreter = SlashCommandInterpreter(
        ...     resolver=get_repository(), permissions=policy
        ... )
        >>> content, updates = interpreter.interpret("Done.\\n/close", context)
        >>> content, updates.to_dict()
        ('Done.', {'state_event': 'close'})
    """

    def __init__(
        self,
        resolver: ReferenceResolver,
        permissions: PermissionOracle,
        registry: CommandRegistry | None = None,
        todos: TodoTracker | None = None,
        date_parser: DateParser | None = None,
    ) -> None:
        """Initialize the interpreter.

        Args:
            resolver: Reference resolver for command arguments.
            permissions: Permission oracle for command conditions.
            registry: Command registry. Defaults to the built-in catalogue.
            todos: Todo tracker. Defaults to an empty in-memory tracker.
            date_parser: Date parser. Defaults to parse_due_date.
        """
        if registry is None:
            from slashnote.core.commands.definitions import registry as default_registry

            registry = default_registry

        self.registry = registry
        self.resolver = resolver
        self.permissions = permissions
        self.todos = todos if todos is not None else InMemoryTodoTracker()
        self.date_parser = date_parser or parse_due_date
        self.extractor = CommandExtractor(registry)

    def interpret(self, text: str | None, context: CommandContext) -> tuple[str, UpdateSet]:
        """Extract and run the commands in a note.

        Args:
            text: Raw note body.
            context: Work item, user and project the note is evaluated against.

        Returns:
            Tuple of (remaining text, update-set).
        """
        updates = UpdateSet()
        content, invocations = self.extractor.extract(text, context)

        for invocation in invocations:
            self._run(invocation, context, updates)

        if invocations:
            logger.info(
                "Interpreted %d command(s) on %s %s: %s",
                len(invocations),
                context.noteable.human_name,
                context.noteable.id,
                list(updates.to_dict()),
            )
        return content, updates

    def _run(self, invocation: Invocation, context: CommandContext, updates: UpdateSet) -> None:
        """Run one invocation, merging its writes only if it completes."""
        definition = self.registry.lookup(invocation.name)
        if definition is None:
            logger.debug("Skipping unknown command /%s", invocation.name)
            return

        try:
            if not definition.is_available(self, context):
                logger.debug("Condition not met for /%s, dropping", invocation.name)
                return

            if definition.noop:
                return

            if definition.takes_arguments and not invocation.arguments:
                logger.debug("No arguments given to /%s, dropping", invocation.name)
                return

            staged = UpdateSet()
            definition.executor(self, context, staged, *invocation.arguments)
        except Exception:
            logger.exception("Command /%s failed, skipping it", invocation.name)
            return

        updates.merge(staged)

    def available_commands(self, context: CommandContext) -> list[dict[str, Any]]:
        """List the commands applicable in a context, for autocomplete.

        No-op commands are always listed. Definitions whose condition raises
        are left out.

        Args:
            context: Context to evaluate conditions and descriptions against.

        Returns:
            List of dicts with name, aliases, description and params, in
            registration order.
        """
        available: list[dict[str, Any]] = []
        for definition in self.registry.all_definitions():
            try:
                if not definition.is_available(self, context):
                    continue
                description = definition.describe(context)
            except Exception:
                logger.exception("Could not evaluate /%s for autocomplete", definition.name)
                continue

            available.append(
                {
                    "name": definition.name,
                    "aliases": list(definition.aliases),
                    "description": description,
                    "params": definition.params,
                }
            )
        return available

    # ------------------------------------------------------------------------
    # Helpers for conditions and executors
    # ------------------------------------------------------------------------

    def can(self, context: CommandContext, action: Action) -> bool:
        """Check an action on the context's work item.

        UPDATE is checked against the work item, ADMIN against the project.
        """
        ability = ability_for(context.noteable.kind, action)
        subject = context.noteable if action == Action.UPDATE else context.project
        return self.permissions.can(context.current_user, ability, subject)

    def resolve(
        self, context: CommandContext, tokens: Iterable[str], kind: ReferenceKind
    ) -> list[Any]:
        """Resolve tokens to entities, in token order, without duplicates.

        Args:
            context: Context providing project and acting user.
            tokens: Argument tokens.
            kind: Kind of entity to resolve.

        Returns:
            Matching entities, empty if nothing matched.
        """
        found: list[Any] = []
        seen: set[int] = set()
        for token in tokens:
            for entity in self.resolver.resolve(
                token, kind, context.project, context.current_user
            ):
                if entity.id not in seen:
                    seen.add(entity.id)
                    found.append(entity)
        return found

    def project_has_labels(self, context: CommandContext) -> bool:
        return bool(self.resolver.list_labels(context.project.id))

    def project_has_active_milestone(self, context: CommandContext) -> bool:
        return any(
            milestone.is_active
            for milestone in self.resolver.list_milestones(context.project.id)
        )

    def find_label_ids(self, context: CommandContext, tokens: Iterable[str]) -> list[int]:
        return [label.id for label in self.resolve(context, tokens, ReferenceKind.LABEL)]

    def todo_exists(self, context: CommandContext) -> bool:
        return self.todos.todo_exists(context.noteable, context.current_user)

    def parse_date(self, text: str) -> date | None:
        """Parse a date expression, returning None instead of raising."""
        try:
            return self.date_parser(text)
        except Exception:
            logger.debug("Date parser failed on %r", text, exc_info=True)
            return None
