"""Slash command engine for notes.

This module provides:
- CommandDefinition, Invocation, CommandContext, ExtractionResult: data models
- UpdateKey, UpdateSet: the field changes commands produce
- CommandRegistry, CommandSet: registry and declarative builder
- CommandExtractor, extract_commands: strip command lines from note text
- SlashCommandInterpreter: run the applicable commands into an update-set
- registry: the built-in command catalogue
"""

from slashnote.core.commands.definitions import registry
from slashnote.core.commands.exceptions import (
    CommandError,
    DuplicateCommandError,
    InvalidDefinitionError,
    RegistryFrozenError,
)
from slashnote.core.commands.executor import SlashCommandInterpreter
from slashnote.core.commands.models import (
    Arity,
    CommandContext,
    CommandDefinition,
    ExtractionResult,
    Invocation,
)
from slashnote.core.commands.parser import (
    CommandExtractor,
    extract_commands,
    tokenize_arguments,
)
from slashnote.core.commands.registry import CommandRegistry, CommandSet
from slashnote.core.commands.updates import UpdateKey, UpdateSet

__all__ = [
    "Arity",
    "CommandContext",
    "CommandDefinition",
    "CommandError",
    "CommandExtractor",
    "CommandRegistry",
    "CommandSet",
    "DuplicateCommandError",
    "ExtractionResult",
    "InvalidDefinitionError",
    "Invocation",
    "RegistryFrozenError",
    "SlashCommandInterpreter",
    "UpdateKey",
    "UpdateSet",
    "extract_commands",
    "registry",
    "tokenize_arguments",
]
