"""
Tests for command parsing.
"""

from audityzer_bot.telegram_bot.commands import (
    Command,
    audit_started_text,
    parse_command,
    unknown_command_text,
)


class TestParseCommand:
    """Tests for parse_command function."""

    def test_bare_command(self):
        """Command without argument."""
        assert parse_command("/start") == Command(name="/start", argument=None)

    def test_name_is_lowercased(self):
        """Mixed-case names are lowercased."""
        assert parse_command("/HeLp").name == "/help"

    def test_argument_after_first_space(self):
        """Argument follows the first space."""
        result = parse_command("/audit 0xABC")
        assert result == Command(name="/audit", argument="0xABC")

    def test_argument_keeps_inner_spaces(self):
        """Everything after the first whitespace is the argument."""
        result = parse_command("/audit 0xABC   extra words ")
        assert result.argument == "0xABC   extra words"

    def test_argument_case_preserved(self):
        """Only the name is lowercased, not the argument."""
        assert parse_command("/AUDIT 0xAbCdEf").argument == "0xAbCdEf"

    def test_blank_argument_is_absent(self):
        """Whitespace-only argument counts as missing."""
        assert parse_command("/audit     ").argument is None

    def test_newline_separates_argument(self):
        """A newline ends the name like a space."""
        assert parse_command("/audit\n0xABC") == Command(name="/audit", argument="0xABC")

    def test_lone_slash(self):
        """Just a slash."""
        assert parse_command("/") == Command(name="/", argument=None)

    def test_addressed_to_this_bot(self):
        """Group syntax with our username drops the suffix."""
        result = parse_command("/stats@Audityzer_Bot", bot_username="audityzer_bot")
        assert result.name == "/stats"

    def test_addressed_to_other_bot(self):
        """Group syntax for another bot keeps the suffix."""
        result = parse_command("/stats@someone_else", bot_username="audityzer_bot")
        assert result.name == "/stats@someone_else"

    def test_addressed_before_username_known(self):
        """Suffix is kept until the bot knows its username."""
        assert parse_command("/stats@audityzer_bot").name == "/stats@audityzer_bot"


class TestReplyTexts:
    """User input echoed back is HTML-escaped."""

    def test_unknown_command_escaped(self):
        """Unknown token is escaped for HTML parse mode."""
        text = unknown_command_text("/<script>")
        assert "Unknown command: /&lt;script&gt;" in text
        assert "/help" in text

    def test_audit_started(self):
        """Audit acknowledgement names the address."""
        text = audit_started_text("0xABC")
        assert text.startswith("Starting audit for:")
        assert "0xABC" in text
