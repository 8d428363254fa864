"""Selection gate between scanning and planning.

Reduces the discovered candidates to the set that will be acted on:
size/age thresholds first, then the optional interactive decision, then
a single global confirmation phrase. A confirmation mismatch aborts the
whole run with nothing selected.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from dirpurge.models.candidate import Candidate
from dirpurge.models.config import DEFAULT_CONFIRM_PHRASE, ScanConfig

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Interactive verdict for one candidate."""

    KEEP = "keep"
    DELETE = "delete"


class Decider(Protocol):
    """Provides a keep/delete decision per candidate."""

    def decide(self, candidate: Candidate) -> Decision: ...


class Confirmer(Protocol):
    """Asks the user to type the confirmation phrase."""

    def confirm(self, expected_phrase: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Output of the selection gate.

    Attributes:
        selected: Candidates to act on, in discovery order.
        filtered: Candidates dropped by size/age thresholds.
        declined: Candidates kept by the interactive decision.
        aborted: True if confirmation failed; ``selected`` is then empty.
        abort_reason: Why the run was aborted.
    """

    selected: tuple[Candidate, ...] = ()
    filtered: tuple[Candidate, ...] = ()
    declined: tuple[Candidate, ...] = ()
    aborted: bool = False
    abort_reason: str | None = None


@dataclass(frozen=True, slots=True)
class PhraseConfirmer:
    """Confirmer comparing a pre-supplied phrase.

    Attributes:
        supplied: The phrase the user typed.
    """

    supplied: str | None = field(default=None)

    def confirm(self, expected_phrase: str) -> bool:
        """Exact, case-sensitive comparison after trimming whitespace."""
        if self.supplied is None:
            return False
        return self.supplied.strip() == expected_phrase


def passes_thresholds(candidate: Candidate, config: ScanConfig) -> bool:
    """Check the inclusive size and age lower bounds.

    A candidate whose age is unknown never satisfies a configured
    minimum age.

    Args:
        candidate: Candidate to check.
        config: Scan configuration holding the thresholds.

    Returns:
        True if the candidate is at least as large and old as required.
    """
    if candidate.size_bytes < config.min_size_bytes:
        return False
    if config.min_age is not None:
        if candidate.age is None or candidate.age < config.min_age:
            return False
    return True


class SelectionGate:
    """Single-pass filter producing the final deletion set.

    Args:
        config: Scan configuration with size/age thresholds.
        decider: Interactive decision provider (None = non-interactive).
        confirmer: Confirmation provider used when confirmation is required.
        require_confirmation: Whether the confirmation phrase gates the run.
        confirm_phrase: Phrase the confirmer must match.
    """

    def __init__(
        self,
        config: ScanConfig,
        *,
        decider: Decider | None = None,
        confirmer: Confirmer | None = None,
        require_confirmation: bool = False,
        confirm_phrase: str = DEFAULT_CONFIRM_PHRASE,
    ) -> None:
        self._config = config
        self._decider = decider
        self._confirmer = confirmer
        self._require_confirmation = require_confirmation
        self._confirm_phrase = confirm_phrase

    def select(self, candidates: Iterable[Candidate]) -> SelectionResult:
        """Apply thresholds, interactive decisions and confirmation.

        Args:
            candidates: Candidates in discovery order.

        Returns:
            SelectionResult; ``aborted`` is set on confirmation mismatch.
        """
        selected: list[Candidate] = []
        filtered: list[Candidate] = []
        declined: list[Candidate] = []

        for candidate in candidates:
            if not passes_thresholds(candidate, self._config):
                logger.debug("Below size/age threshold: %s", candidate.path)
                filtered.append(candidate)
                continue

            if self._decider is not None:
                if self._decider.decide(candidate) == Decision.KEEP:
                    logger.debug("Kept by user: %s", candidate.path)
                    declined.append(candidate)
                    continue

            selected.append(candidate)

        if selected and self._require_confirmation:
            confirmed = self._confirmer is not None and self._confirmer.confirm(
                self._confirm_phrase
            )
            if not confirmed:
                logger.warning("Confirmation phrase mismatch, aborting run")
                return SelectionResult(
                    filtered=tuple(filtered),
                    declined=tuple(declined),
                    aborted=True,
                    abort_reason="Confirmation phrase mismatch",
                )

        return SelectionResult(
            selected=tuple(selected),
            filtered=tuple(filtered),
            declined=tuple(declined),
        )
