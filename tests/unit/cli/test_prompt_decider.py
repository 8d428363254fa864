"""Unit tests for the interactive prompts."""

from collections.abc import Callable
from unittest.mock import patch

from dirpurge.cli.prompts import PromptConfirmer, PromptDecider
from dirpurge.core.selection import Decision
from dirpurge.models.candidate import Candidate


class TestPromptDecider:
    """Tests for PromptDecider."""

    def test_yes_and_no(self, make_candidate: Callable[..., Candidate]) -> None:
        """'y' selects, anything else keeps."""
        decider = PromptDecider(total=3)
        candidate = make_candidate(create=False)

        with patch("dirpurge.cli.prompts.typer.prompt", side_effect=["y", "n", "maybe"]):
            decisions = [decider.decide(candidate) for _ in range(3)]

        assert decisions == [Decision.DELETE, Decision.KEEP, Decision.KEEP]

    def test_all_selects_remaining(self, make_candidate: Callable[..., Candidate]) -> None:
        """'a' selects the current and every later candidate without asking."""
        decider = PromptDecider(total=3)
        candidate = make_candidate(create=False)

        with patch("dirpurge.cli.prompts.typer.prompt", return_value="a") as mock_prompt:
            decisions = [decider.decide(candidate) for _ in range(3)]

        assert decisions == [Decision.DELETE] * 3
        mock_prompt.assert_called_once()

    def test_quit_keeps_remaining(self, make_candidate: Callable[..., Candidate]) -> None:
        """'q' keeps the current and every later candidate without asking."""
        decider = PromptDecider()
        candidate = make_candidate(create=False)

        with patch("dirpurge.cli.prompts.typer.prompt", return_value=" Q ") as mock_prompt:
            decisions = [decider.decide(candidate) for _ in range(2)]

        assert decisions == [Decision.KEEP, Decision.KEEP]
        mock_prompt.assert_called_once()


class TestPromptConfirmer:
    """Tests for PromptConfirmer."""

    def test_exact_phrase(self) -> None:
        """The typed phrase must match exactly."""
        with patch("dirpurge.cli.prompts.typer.prompt", return_value="DELETE"):
            assert PromptConfirmer().confirm("DELETE") is True

    def test_case_sensitive(self) -> None:
        """A differently cased phrase is rejected."""
        with patch("dirpurge.cli.prompts.typer.prompt", return_value="delete"):
            assert PromptConfirmer(permanent=False).confirm("DELETE") is False

    def test_empty_input(self) -> None:
        """Pressing enter does not confirm."""
        with patch("dirpurge.cli.prompts.typer.prompt", return_value=""):
            assert PromptConfirmer().confirm("DELETE") is False
