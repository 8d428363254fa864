"""Terminal prompts backing the selection gate.

The interactive picker and the confirmation phrase prompt implement the
Decider and Confirmer capabilities used by the pipeline.
"""

import typer

from dirpurge.core.selection import Decision, PhraseConfirmer
from dirpurge.models.candidate import Candidate
from dirpurge.utils.formatting import console, format_age, format_size


class PromptDecider:
    """Asks y/n/a/q for each candidate.

    ``a`` selects the current and every remaining candidate, ``q`` keeps
    the current and every remaining candidate. Anything else but ``y``
    keeps the directory.

    Args:
        total: Number of candidates, for the progress counter.
    """

    def __init__(self, total: int = 0) -> None:
        self.total = total
        self._index = 0
        self._select_all = False
        self._quit = False

    def decide(self, candidate: Candidate) -> Decision:
        """Prompt for one candidate."""
        self._index += 1
        counter = f"[{self._index}/{self.total}]" if self.total else f"[{self._index}]"

        if self._quit:
            return Decision.KEEP
        if self._select_all:
            console.print(f"{counter} [success]Selected:[/] {candidate.path}")
            return Decision.DELETE

        console.print(f"\n{counter} Directory: [bold]{candidate.path}[/bold]")
        console.print(f"   Size: {format_size(candidate.size_bytes)}")
        console.print(f"   Age: {format_age(candidate.age)}")
        console.print(f"   Items: {candidate.item_count}")

        answer = typer.prompt("Select? (y/n/a/q)", default="n").strip().lower()
        if answer == "y":
            return Decision.DELETE
        if answer == "a":
            self._select_all = True
            console.print("[success]Selected all remaining directories[/]")
            return Decision.DELETE
        if answer == "q":
            self._quit = True
            console.print("[warning]Selection finished, keeping the rest[/]")
            return Decision.KEEP

        console.print("[muted]Skipped[/]")
        return Decision.KEEP


class PromptConfirmer:
    """Asks the user to type the confirmation phrase."""

    def __init__(self, permanent: bool = True) -> None:
        self._permanent = permanent

    def confirm(self, expected_phrase: str) -> bool:
        """Prompt once and compare exactly."""
        if self._permanent:
            console.print("[error]WARNING! This will permanently delete directories![/]")
        else:
            console.print("[warning]The selected directories will be moved to the trash.[/]")
        supplied = typer.prompt(
            f"Type '{expected_phrase}' to confirm",
            default="",
            show_default=False,
        )
        return PhraseConfirmer(supplied).confirm(expected_phrase)
