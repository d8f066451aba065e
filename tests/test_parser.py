"""Tests for command extraction and argument tokenization."""

import pytest

from slashnote.core.commands.definitions import registry
from slashnote.core.commands.models import Invocation
from slashnote.core.commands.parser import (
    CommandExtractor,
    extract_commands,
    parse_command_line,
    tokenize_arguments,
)


class TestTokenizeArguments:
    """Test suite for quote-aware argument splitting."""

    def test_plain_tokens(self) -> None:
        assert tokenize_arguments("~bug ~feature") == ["~bug", "~feature"]

    def test_quoted_span_is_one_token(self) -> None:
        """Test that quotes keep whitespace and are removed."""
        assert tokenize_arguments('~bug ~"needs triage"') == ["~bug", "~needs triage"]

    def test_fully_quoted_token(self) -> None:
        assert tokenize_arguments('"v2.0 beta"') == ["v2.0 beta"]

    def test_extra_whitespace(self) -> None:
        assert tokenize_arguments("   @alice    @bob  ") == ["@alice", "@bob"]

    def test_empty(self) -> None:
        assert tokenize_arguments("") == []
        assert tokenize_arguments("   ") == []

    def test_unterminated_quote_takes_rest_of_line(self) -> None:
        """Test that a missing closing quote never raises."""
        assert tokenize_arguments('~bug ~"needs triage') == ["~bug", "~needs triage"]

    def test_unterminated_quote_after_space(self) -> None:
        assert tokenize_arguments('~bug "rest of line') == ["~bug", "rest of line"]

    def test_unterminated_quote_only(self) -> None:
        assert tokenize_arguments('"') == []

    def test_single_quote_is_literal(self) -> None:
        """Test that apostrophes are not quote characters."""
        assert tokenize_arguments("~won't ~fix") == ["~won't", "~fix"]

    def test_hash_is_not_a_comment(self) -> None:
        assert tokenize_arguments("~#123 ~bug") == ["~#123", "~bug"]


class TestParseCommandLine:
    """Test suite for single-line parsing."""

    def test_command_without_arguments(self) -> None:
        assert parse_command_line("/close", registry) == Invocation(name="close")

    def test_leading_whitespace(self) -> None:
        assert parse_command_line("   /close", registry) == Invocation(name="close")

    def test_case_insensitive_name(self) -> None:
        assert parse_command_line("/CLOSE", registry) == Invocation(name="close")

    def test_alias_keeps_typed_name(self) -> None:
        assert parse_command_line("/reassign @bob", registry) == Invocation(
            name="reassign", arguments=("bob",)
        )

    def test_unknown_command(self) -> None:
        assert parse_command_line("/shrug", registry) is None

    def test_name_must_end_at_whitespace(self) -> None:
        """Test that a known name followed by other characters is not a match."""
        assert parse_command_line("/closed", registry) is None
        assert parse_command_line("/close.", registry) is None

    def test_marker_must_start_the_line(self) -> None:
        assert parse_command_line("please /close", registry) is None

    def test_path_like_text(self) -> None:
        assert parse_command_line("/usr/bin/env", registry) is None

    def test_single_arity_keeps_whole_rest(self) -> None:
        """Test that SINGLE commands receive the rest of the line verbatim."""
        assert parse_command_line('/title  Fix "the" crash  ', registry) == Invocation(
            name="title", arguments=('Fix "the" crash',)
        )

    def test_no_arity_drops_trailing_text(self) -> None:
        assert parse_command_line("/close right now", registry) == Invocation(name="close")

    def test_label_tokens_have_sigil_stripped(self) -> None:
        """Test that label arguments come out as bare label names."""
        invocation = parse_command_line('/label ~bug ~"needs triage"', registry)
        assert invocation.arguments == ("bug", "needs triage")

    def test_milestone_quoted(self) -> None:
        invocation = parse_command_line('/milestone %"v2.0"', registry)
        assert invocation.arguments == ("v2.0",)

    def test_argument_command_without_argument(self) -> None:
        assert parse_command_line("/assign", registry) == Invocation(name="assign")

    def test_carriage_return_ignored(self) -> None:
        assert parse_command_line("/close\r", registry) == Invocation(name="close")


class TestCommandExtractor:
    """Test suite for CommandExtractor."""

    def test_identity_without_commands(self) -> None:
        """Test that text without command lines comes back unchanged."""
        text = "  Hello\n\nthis is /not a command\r\n/shrug\n"
        content, invocations = extract_commands(text, registry)

        assert content == text
        assert invocations == ()

    def test_empty_text(self) -> None:
        assert extract_commands("", registry) == ("", ())

    def test_none_text(self) -> None:
        result = extract_commands(None, registry)
        assert result.content == ""
        assert result.invocations == ()

    def test_commands_only(self) -> None:
        """Test that a note of only commands leaves no text."""
        content, invocations = extract_commands("/close\n/todo\n\n/subscribe\n", registry)

        assert content == ""
        assert [i.name for i in invocations] == ["close", "todo", "subscribe"]

    def test_round_trip_example(self) -> None:
        content, invocations = extract_commands(
            "Fixing the bug.\n/close\n/label ~bug\n", registry
        )

        assert content == "Fixing the bug."
        assert invocations == (
            Invocation(name="close"),
            Invocation(name="label", arguments=("bug",)),
        )

    def test_order_of_appearance(self) -> None:
        content, invocations = extract_commands(
            "/title A\nmiddle\n/title B", registry
        )

        assert content == "middle"
        assert [i.arguments for i in invocations] == [("A",), ("B",)]

    def test_commands_between_paragraphs(self) -> None:
        """Test that inner blank lines survive while outer ones are trimmed."""
        text = "\n/close\nFirst paragraph.\n\n/assign @alice\nSecond paragraph.\n/todo\n\n"
        content, _ = extract_commands(text, registry)

        assert content == "First paragraph.\n\nSecond paragraph."

    def test_unknown_command_lines_are_text(self) -> None:
        content, invocations = extract_commands("/shrug\n/close", registry)

        assert content == "/shrug"
        assert invocations == (Invocation(name="close"),)

    def test_carriage_returns_dropped_when_commands_found(self) -> None:
        content, _ = extract_commands("Hello\r\n/close\r\nWorld\r\n", registry)
        assert content == "Hello\nWorld"

    def test_indentation_of_kept_lines_preserved(self) -> None:
        content, _ = extract_commands("/close\n    indented code\nafter", registry)
        assert content == "    indented code\nafter"

    def test_commands_in_code_fence_ignored(self) -> None:
        """Test that fenced code blocks are never scanned for commands."""
        text = "Example:\n```\n/close\n```\n/todo"
        content, invocations = extract_commands(text, registry)

        assert content == "Example:\n```\n/close\n```"
        assert invocations == (Invocation(name="todo"),)

    def test_tilde_fence(self) -> None:
        text = "~~~\n/close\n~~~"
        assert extract_commands(text, registry).invocations == ()

    def test_backtick_fence_not_closed_by_tildes(self) -> None:
        text = "```\n~~~\n/close\n```\n/close"
        content, invocations = extract_commands(text, registry)

        assert invocations == (Invocation(name="close"),)
        assert content == "```\n~~~\n/close\n```"

    def test_commands_in_blockquote_ignored(self) -> None:
        text = ">>>\n/close\n>>>\n/reopen"
        content, invocations = extract_commands(text, registry)

        assert content == ">>>\n/close\n>>>"
        assert invocations == (Invocation(name="reopen"),)

    def test_unclosed_fence_protects_rest_of_text(self) -> None:
        text = "```\n/close"
        assert extract_commands(text, registry) == (text, ())

    @pytest.mark.parametrize(
        "text",
        [
            "Fixing the bug.\n/close\n/label ~bug\n",
            "```\n/close\n```\n/close\n",
            "/title x\n\n\n/close\n\ntext\n/todo",
            "a\n>>>\n/close\n>>>\n/done",
        ],
    )
    def test_extraction_is_idempotent(self, text: str) -> None:
        """Test that stripped output never yields commands again."""
        first = extract_commands(text, registry)
        second = extract_commands(first.content, registry)

        assert second.invocations == ()
        assert second.content == first.content

    def test_context_is_accepted(self, context) -> None:
        extractor = CommandExtractor(registry)
        assert extractor.extract("/close", context).invocations == (Invocation(name="close"),)
