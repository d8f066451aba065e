# slashnote/core/commands/models.py
"""Data models for slash command definitions and their invocations.

This module defines:
- Arity: how the text after a command name is turned into arguments
- CommandDefinition: one entry of the command catalogue
- CommandContext: the work item, user and project a note is evaluated against
- Invocation: one command found in a note
- ExtractionResult: the note text with command lines removed, plus invocations
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

from slashnote.core.references.models import ReferenceKind
from slashnote.core.workitems.models import Project, User, WorkItem


class Arity(str, Enum):
    """Argument shape a command accepts.

    NONE ignores anything after the name, SINGLE passes the rest of the line
    as one argument, MULTIPLE splits it into quote-aware tokens.
    """

    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class CommandContext:
    """Immutable bundle a note's commands are evaluated against.

    Attributes:
        noteable: The work item the note is attached to.
        current_user: The user submitting the note.
        project: The project the work item belongs to.
    """

    noteable: WorkItem
    current_user: User
    project: Project


# (interpreter, context) -> bool
Condition = Callable[[Any, CommandContext], bool]
# (interpreter, context, updates, *arguments) -> None
Executor = Callable[..., None]


@dataclass(frozen=True)
class CommandDefinition:
    """Definition of a single slash command.

    Attributes:
        name: Primary command name (lowercase).
        aliases: Alternative names resolving to this command.
        description: Help text, or a function of the context producing it.
        params: Parameter hint shown next to the name, e.g. "@user".
        condition: Predicate deciding whether the command applies; None
            means it always applies.
        arity: Shape of the arguments the executor receives.
        reference: Kind of mention the arguments name; its sigil is stripped
            from MULTIPLE tokens.
        noop: Registered for discoverability only, never executed.
        executor: Function writing into the update-set.
    """

    name: str
    aliases: tuple[str, ...] = ()
    description: str | Callable[[CommandContext], str] = ""
    params: str = ""
    condition: Condition | None = None
    arity: Arity = Arity.NONE
    reference: ReferenceKind | None = None
    noop: bool = False
    executor: Executor | None = field(default=None, compare=False)

    @property
    def names(self) -> tuple[str, ...]:
        """Primary name followed by all aliases."""
        return (self.name, *self.aliases)

    @property
    def takes_arguments(self) -> bool:
        return self.arity != Arity.NONE

    def describe(self, context: CommandContext | None = None) -> str:
        """Render the description, evaluating it against a context if dynamic.

        Args:
            context: Context for dynamic descriptions.

        Returns:
            Description text; empty if dynamic and no context is given.
        """
        if callable(self.description):
            return self.description(context) if context is not None else ""
        return self.description

    def is_available(self, state: Any, context: CommandContext) -> bool:
        if self.condition is None:
            return True
        return bool(self.condition(state, context))


@dataclass(frozen=True)
class Invocation:
    """A command found in note text.

    Attributes:
        name: Command name as typed (lowercased), primary name or alias.
        arguments: Argument tokens in the order they appeared.
    """

    name: str
    arguments: tuple[str, ...] = ()


class ExtractionResult(NamedTuple):
    """Note text with command lines stripped, plus the commands found.

    Unpacks as `content, invocations = result` and compares equal to the
    plain `(content, invocations)` tuple.

    Attributes:
        content: Remaining text.
        invocations: Invocations in order of appearance.
    """

    content: str
    invocations: tuple[Invocation, ...] = ()
