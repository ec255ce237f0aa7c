"""Tests for transcript construction and expression extraction."""

from __future__ import annotations

from scribe.core.session.commands import SPECIAL_COMMANDS
from scribe.core.session.transcript import (
    Transcript,
    entered_expression,
    help_text,
    initial_preamble,
)


class TestEnteredExpression:
    """Tests for entered_expression()."""

    def test_bare_prompt_is_empty(self):
        """Prompt with trailing space and nothing typed extracts ''."""
        assert entered_expression(">> ", ">>") == ""

    def test_bare_prompt_after_earlier_command(self):
        """A trailing fresh prompt wins over earlier input."""
        assert entered_expression(">> foo\n>> ", ">>") == ""

    def test_text_after_prompt(self):
        """Text after the last prompt is the expression."""
        assert entered_expression(">> foo", ">>") == "foo"

    def test_last_of_many_prompts(self):
        """Only the segment after the last prompt counts."""
        contents = "# REPL\n# type 'help' for help\n\n>> 1\n=> 1\n>> 2 + 2"
        assert entered_expression(contents, ">>") == "2 + 2"

    def test_surrounding_whitespace_trimmed(self):
        """Whitespace around the expression is stripped."""
        assert entered_expression(">>    foo bar   \n", ">>") == "foo bar"

    def test_trailing_blank_lines_tolerated(self):
        """Blank lines after a bare prompt still extract ''."""
        assert entered_expression(">> foo\n>>   \n\n\n", ">>") == ""

    def test_multiline_expression(self):
        """Everything after the last prompt is taken, newlines included."""
        assert entered_expression(">> def f():\n    return 1", ">>") == "def f():\n    return 1"

    def test_no_prompt_is_empty(self):
        """Text without any prompt extracts ''."""
        assert entered_expression("foo", ">>") == ""
        assert entered_expression("", ">>") == ""

    def test_prompt_with_regex_characters(self):
        """Prompts are matched literally."""
        assert entered_expression("$ ls -la", "$") == "ls -la"
        assert entered_expression("$ ls\n$ ", "$") == ""
        assert entered_expression("a.b ", "a.b") == ""
        assert entered_expression("axb ", "a.b") == ""

    def test_prompt_without_space_skipped(self):
        """A bare prompt with nothing after it leaves the previous segment."""
        assert entered_expression(">> foo\n>>", ">>") == "foo"
        assert entered_expression(">> 1\n=> 1\n>> 2>>", ">>") == "2"

    def test_only_prompts_is_empty(self):
        assert entered_expression(">>", ">>") == ""
        assert entered_expression(">>>>", ">>") == ""


class TestPreambleAndHelp:
    """Tests for initial_preamble() and help_text()."""

    def test_initial_preamble(self):
        """Preamble is title line, help hint, blank line and prompt."""
        assert initial_preamble("Python REPL", ">>>") == (
            "# Python REPL\n# type 'help' for help\n\n>>> "
        )

    def test_help_lists_every_command(self):
        """Help has a greeting and one line per special command."""
        text = help_text("Test REPL", SPECIAL_COMMANDS)
        assert text.startswith(
            "Hello! I am a Test REPL. I am here to assist you in exploring language APIs.\n\n"
            "Commands:\n"
        )
        for cmd, description in SPECIAL_COMMANDS.items():
            assert f"{cmd} : {description}\n" in text
        assert text.endswith("buffer [int] : Sets command history buffer size\n")


class TestTranscript:
    """Tests for Transcript."""

    def test_offset_starts_at_length(self):
        """Initial offset is the length of the initial text."""
        transcript = Transcript(prompt=">>", text="# REPL\n>> ")
        assert transcript.current_offset == len("# REPL\n>> ")

    def test_mark_ready_appends_prompt(self):
        """mark_ready ends the text with a fresh prompt and updates the offset."""
        transcript = Transcript(prompt=">>", text=">> ")
        transcript.append("1\n")
        transcript.append_output("1")
        transcript.mark_ready()
        assert transcript.text == ">> 1\n=> 1\n>> "
        assert transcript.current_offset == len(transcript.text)

    def test_error_marker(self):
        """Errors use the 'x> ' marker."""
        transcript = Transcript(prompt=">>")
        transcript.append_error("boom")
        assert transcript.text == "x> boom"

    def test_replace(self):
        """replace swaps the whole text and updates the offset."""
        transcript = Transcript(prompt=">>", text="lots of text\n>> ")
        transcript.replace(transcript.ready_marker)
        assert transcript.text == ">> "
        assert transcript.current_offset == 3

    def test_offset_counts_characters(self):
        """The offset counts characters, not bytes."""
        transcript = Transcript(prompt="λ", text="λ ")
        transcript.append("é")
        transcript.mark_ready()
        assert transcript.current_offset == len("λ é\nλ ") == 6
