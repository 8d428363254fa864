"""Deletion planning.

Turns each selected candidate into an ordered action plan and reserves
collision-free backup and archive destinations for the whole run.
"""

import hashlib
import logging
from pathlib import Path

from dirpurge.core.errors import PlanningError
from dirpurge.models.candidate import Candidate
from dirpurge.models.config import DeletionConfig
from dirpurge.models.plan import ActionPlan, ActionType, PlannedAction

logger = logging.getLogger(__name__)

_MAX_SUFFIX_ATTEMPTS = 1000
_ARCHIVE_SUFFIX = ".zip"


def path_digest(path: Path) -> str:
    """Short stable digest of a path, used to disambiguate equal names."""
    return hashlib.sha1(str(path).encode("utf-8"), usedforsecurity=False).hexdigest()[:8]


class DeletionPlanner:
    """Builds action plans for one run.

    A planner instance remembers every destination it handed out, so two
    candidates with the same name never share a backup path.

    Args:
        config: Deletion options.
    """

    def __init__(self, config: DeletionConfig) -> None:
        self._config = config
        self._reserved: set[Path] = set()

    def plan(self, candidate: Candidate) -> ActionPlan:
        """Plan the actions for a candidate.

        Args:
            candidate: Selected directory.

        Returns:
            ActionPlan with optional backup/archive steps and one terminal step.

        Raises:
            PlanningError: If no free backup/archive destination exists.
        """
        actions: list[PlannedAction] = []

        if self._config.backup:
            target = self._reserve(candidate, "")
            actions.append(PlannedAction(ActionType.BACKUP, target))

        if self._config.archive:
            target = self._reserve(candidate, _ARCHIVE_SUFFIX)
            actions.append(PlannedAction(ActionType.ARCHIVE, target))

        terminal = ActionType.TRASH if self._config.use_trash else ActionType.REMOVE
        actions.append(PlannedAction(terminal))

        plan = ActionPlan(candidate=candidate, actions=tuple(actions))
        logger.debug(
            "Planned %s: %s",
            candidate.path,
            " -> ".join(a.action_type.value for a in plan.actions),
        )
        return plan

    def _reserve(self, candidate: Candidate, suffix: str) -> Path:
        """Find a destination not used earlier in this run nor on disk."""
        backup_dir = self._config.backup_dir.resolve()
        stem = f"{candidate.name}-{path_digest(candidate.path)}"

        for attempt in range(_MAX_SUFFIX_ATTEMPTS):
            name = stem if attempt == 0 else f"{stem}-{attempt}"
            target = backup_dir / f"{name}{suffix}"
            if target in self._reserved or target.exists() or target.is_symlink():
                continue
            self._reserved.add(target)
            return target

        msg = f"No free backup destination for {candidate.path} in {backup_dir}"
        raise PlanningError(msg)
