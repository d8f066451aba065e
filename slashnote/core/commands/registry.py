# slashnote/core/commands/registry.py
"""Command registry and the declarative builder used to fill it.

Usage:
    from slashnote.core.commands.registry import CommandSet

    commands = CommandSet()

    @commands.command("close", description="Close this item", condition=is_open)
    def close(interpreter, context, updates):
        updates.set(UpdateKey.STATE_EVENT, "close")

    registry = commands.build()

The registry is assembled once at import time and frozen. Lookups go
through read-only mappings, so a frozen registry can be shared by any
number of concurrent interpretations without locking.
"""

import logging
from collections.abc import Callable
from types import MappingProxyType
from typing import TypeVar

from slashnote.core.commands.exceptions import (
    DuplicateCommandError,
    InvalidDefinitionError,
    RegistryFrozenError,
)
from slashnote.core.commands.models import (
    Arity,
    CommandContext,
    CommandDefinition,
    Condition,
    Executor,
)
from slashnote.core.references.models import ReferenceKind

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Executor)


class CommandRegistry:
    """Lookup table from command names and aliases to definitions.

    Registration is expected to happen at startup. Once `freeze()` has been
    called the registry rejects new definitions.
    """

    def __init__(self) -> None:
        self._definitions: list[CommandDefinition] = []
        self._by_name: dict[str, CommandDefinition] = {}
        self._frozen = False

    def register(self, definition: CommandDefinition) -> None:
        """Register a definition under its name and all of its aliases.

        Args:
            definition: The command to register.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            InvalidDefinitionError: If the definition has no name, or its
                executor does not match its noop flag.
            DuplicateCommandError: If the name or an alias is already taken.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '/{definition.name}': registry is frozen"
            )

        _validate(definition)

        names = [n.lower() for n in definition.names]
        seen: set[str] = set()
        for name in names:
            existing = self._by_name.get(name)
            if existing is not None:
                raise DuplicateCommandError(name, existing.name)
            if name in seen:
                raise DuplicateCommandError(name, definition.name)
            seen.add(name)

        self._definitions.append(definition)
        for name in names:
            self._by_name[name] = definition

        logger.debug(
            "Registered command: /%s (aliases=%s)", definition.name, definition.aliases
        )

    def freeze(self) -> "CommandRegistry":
        """Make the registry read-only and return it."""
        if not self._frozen:
            self._by_name = MappingProxyType(self._by_name)  # type: ignore[assignment]
            self._definitions = tuple(self._definitions)  # type: ignore[assignment]
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> CommandDefinition | None:
        """Resolve a command name or alias to its definition.

        Args:
            name: Command name or alias (case-insensitive).

        Returns:
            The matched CommandDefinition, or None if not found.
        """
        return self._by_name.get(name.lower())

    def all_definitions(self) -> tuple[CommandDefinition, ...]:
        """All definitions in registration order."""
        return tuple(self._definitions)

    def names(self) -> tuple[str, ...]:
        """Every registered name and alias, lowercase."""
        return tuple(self._by_name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    def __len__(self) -> int:
        return len(self._definitions)


def _validate(definition: CommandDefinition) -> None:
    if not definition.name or not all(definition.names):
        raise InvalidDefinitionError("Command names must be non-empty")
    if definition.noop and definition.executor is not None:
        raise InvalidDefinitionError(
            f"No-op command '/{definition.name}' must not have an executor"
        )
    if not definition.noop and definition.executor is None:
        raise InvalidDefinitionError(
            f"Command '/{definition.name}' has no executor"
        )


class CommandSet:
    """Declarative builder for a command catalogue.

    Each `@command(...)` decorator registers the decorated function as the
    executor of a new definition. The function is returned unchanged, so it
    can still be called directly in tests.
    """

    def __init__(self) -> None:
        self._registry = CommandRegistry()

    def command(
        self,
        *names: str,
        description: str | Callable[[CommandContext], str] = "",
        params: str = "",
        condition: Condition | None = None,
        arity: Arity = Arity.NONE,
        reference: ReferenceKind | None = None,
    ) -> Callable[[E], E]:
        """Register the decorated function as a command executor.

        Args:
            *names: Primary name followed by aliases.
            description: Help text or a function of the context.
            params: Parameter hint, e.g. '~label1 ~"label 2"'.
            condition: Applicability predicate `(interpreter, context) -> bool`.
            arity: Argument shape passed to the executor.
            reference: Mention kind whose sigil is stripped from tokens.

        Returns:
            Decorator registering the executor.
        """
        if not names:
            raise InvalidDefinitionError("A command needs at least one name")

        def decorator(func: E) -> E:
            self._registry.register(
                CommandDefinition(
                    name=names[0].lower(),
                    aliases=tuple(n.lower() for n in names[1:]),
                    description=description,
                    params=params,
                    condition=condition,
                    arity=arity,
                    reference=reference,
                    executor=func,
                )
            )
            return func

        return decorator

    def noop(
        self,
        *names: str,
        description: str = "",
        params: str = "",
        arity: Arity = Arity.NONE,
        reference: ReferenceKind | None = None,
    ) -> None:
        """Register a discoverability-only command that never executes."""
        if not names:
            raise InvalidDefinitionError("A command needs at least one name")

        self._registry.register(
            CommandDefinition(
                name=names[0].lower(),
                aliases=tuple(n.lower() for n in names[1:]),
                description=description,
                params=params,
                arity=arity,
                reference=reference,
                noop=True,
            )
        )

    def build(self) -> CommandRegistry:
        """Freeze and return the registry."""
        registry = self._registry.freeze()
        logger.debug("Built command registry with %d commands", len(registry))
        return registry
