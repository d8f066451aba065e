"""Extraction of slash commands from note text.

A command line is a line whose first non-blank character is `/`, followed
by a registered command name or alias and then whitespace or the end of
the line. The whole line is consumed; everything else in the note is kept
as text. Lines inside fenced code blocks and `>>>` blockquotes are never
treated as commands.
"""

import logging
import re
import shlex

from slashnote.core.commands.models import (
    Arity,
    CommandContext,
    CommandDefinition,
    ExtractionResult,
    Invocation,
)
from slashnote.core.commands.registry import CommandRegistry

logger = logging.getLogger(__name__)

COMMAND_PATTERN: re.Pattern[str] = re.compile(r"^[ \t]*/(\S+)(?:[ \t]+(.*))?$")

# Opening/closing markers of blocks whose content is never scanned
FENCE_PATTERN: re.Pattern[str] = re.compile(r"^[ \t]*(`{3,}|~{3,})")
QUOTE_FENCE_PATTERN: re.Pattern[str] = re.compile(r"^[ \t]*>>>")


def tokenize_arguments(raw: str) -> list[str]:
    """Split an argument string into tokens, keeping double-quoted spans whole.

    Quotes are removed but the text inside them is preserved, including
    whitespace. A token may mix quoted and unquoted parts, so
    `~"needs triage"` becomes `~needs triage`. An unterminated quote turns
    the rest of the string into a single token instead of failing.

    Args:
        raw: Argument text following the command name.

    Returns:
        List of tokens, empty for blank input.

    Examples:
        >>> tokenize_arguments('~bug ~"needs triage"')
        ['~bug', '~needs triage']

        >>> tokenize_arguments('%"v2.0 beta')
        ['%v2.0 beta']
    """
    stripped = raw.strip()
    if not stripped:
        return []

    try:
        return _split(stripped)
    except ValueError:
        logger.debug("Unterminated quote in arguments: %r", stripped)

    # Only double quotes are quote characters, so the last one is unmatched
    head, _, tail = stripped.rpartition('"')
    tokens = _split(head) if head.strip() else []
    if tokens and not head[-1].isspace():
        tokens[-1] += tail
    else:
        tokens.append(tail)
    return [token for token in tokens if token]


def _split(text: str) -> list[str]:
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.quotes = '"'
    lexer.escape = ""
    lexer.commenters = ""
    return list(lexer)


def build_arguments(definition: CommandDefinition, raw: str | None) -> tuple[str, ...]:
    """Turn the text after a command name into executor arguments.

    Args:
        definition: The matched command definition.
        raw: Text following the name on the same line, if any.

    Returns:
        Tuple of arguments shaped by the definition's arity.
    """
    raw = (raw or "").strip()
    if definition.arity == Arity.NONE or not raw:
        return ()

    if definition.arity == Arity.SINGLE:
        return (raw,)

    tokens = tokenize_arguments(raw)
    if definition.reference is not None:
        tokens = [definition.reference.strip_sigil(token) for token in tokens]
    return tuple(token for token in tokens if token)


def parse_command_line(line: str, registry: CommandRegistry) -> Invocation | None:
    """Parse a single line as a command invocation.

    Args:
        line: One line of note text.
        registry: Registry of known command names.

    Returns:
        Invocation if the line is a command line, otherwise None.

    Examples:
        >>> parse_command_line("/close", registry)
        Invocation(name='close', arguments=())

        >>> parse_command_line("/unknown thing", registry)
        None
    """
    match = COMMAND_PATTERN.match(line.rstrip("\r"))
    if match is None:
        return None

    name = match.group(1).lower()
    definition = registry.lookup(name)
    if definition is None:
        return None

    return Invocation(name=name, arguments=build_arguments(definition, match.group(2)))


class CommandExtractor:
    """Finds command lines in note text and strips them out.

    Attributes:
        registry: Registry deciding which names are commands.

    Example:
        >>> extractor = CommandExtractor(registry)
        >>> content, invocations = extractor.extract("Done.\\n/close")
        >>> content
        'Done.'
        >>> invocations
        (Invocation(name='close', arguments=()),)
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry

    def extract(
        self, text: str | None, context: CommandContext | None = None
    ) -> ExtractionResult:
        """Extract commands from text.

        Text without any command line is returned unchanged. Otherwise the
        remaining lines are rejoined, carriage returns are dropped, and
        blank lines at the start and end are trimmed.

        Args:
            text: Raw note body.
            context: Evaluation context. Extraction does not depend on it;
                it is accepted so callers can pass the same bundle through
                every stage.

        Returns:
            ExtractionResult with the remaining text and invocations in
            order of appearance.
        """
        if not text:
            return ExtractionResult(content="")

        kept: list[str] = []
        invocations: list[Invocation] = []
        fence: str | None = None
        in_quote_block = False

        for line in text.split("\n"):
            fence_match = FENCE_PATTERN.match(line)
            if fence_match and not in_quote_block:
                marker = fence_match.group(1)
                if fence is None:
                    fence = marker
                elif marker[0] == fence[0] and len(marker) >= len(fence):
                    fence = None
                kept.append(line)
                continue

            if fence is None and QUOTE_FENCE_PATTERN.match(line):
                in_quote_block = not in_quote_block
                kept.append(line)
                continue

            invocation = None
            if fence is None and not in_quote_block:
                invocation = parse_command_line(line, self.registry)

            if invocation is None:
                kept.append(line)
            else:
                invocations.append(invocation)

        if not invocations:
            return ExtractionResult(content=text)

        logger.debug(
            "Extracted %d command(s): %s",
            len(invocations),
            [invocation.name for invocation in invocations],
        )
        return ExtractionResult(
            content=_trim_blank_lines([line.rstrip("\r") for line in kept]),
            invocations=tuple(invocations),
        )


def _trim_blank_lines(lines: list[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


def extract_commands(text: str | None, registry: CommandRegistry) -> ExtractionResult:
    """Extract commands from text using the given registry.

    Shorthand for `CommandExtractor(registry).extract(text)`.
    """
    return CommandExtractor(registry).extract(text)
