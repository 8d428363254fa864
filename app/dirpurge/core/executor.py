"""Plan execution.

Runs the steps of an action plan in order. The first failing step stops
the plan and every later step is reported as skipped, so original data
is never deleted after a failed backup or archive.
"""

import logging
import os
import shutil
import zipfile
from pathlib import Path

from dirpurge.core.errors import ExecutionError
from dirpurge.filesystem.evaluator import SizeAgeEvaluator
from dirpurge.filesystem.trash import Trash, TrashError
from dirpurge.models.candidate import Candidate
from dirpurge.models.config import DeletionConfig
from dirpurge.models.outcome import Outcome, OutcomeStatus, StepResult, StepStatus
from dirpurge.models.plan import ActionPlan, ActionType, PlannedAction

logger = logging.getLogger(__name__)

_PART_SUFFIX = ".part"


class DeletionExecutor:
    """Performs action plans with per-step failure isolation.

    Attributes:
        _config: Deletion options (dry-run is honoured here).
        _trash: Trash used for the trash terminal action.
    """

    def __init__(self, config: DeletionConfig, trash: Trash | None = None) -> None:
        """Initialize the DeletionExecutor.

        Args:
            config: Deletion options.
            trash: Trash location. Defaults to ``config.trash_dir`` or the
                XDG user trash.
        """
        self._config = config
        self._trash = trash if trash is not None else Trash(config.trash_dir)

    def execute(self, plan: ActionPlan) -> Outcome:
        """Execute a plan and report its outcome.

        Args:
            plan: Plan to execute.

        Returns:
            Outcome with one StepResult per planned action.
        """
        candidate = plan.candidate

        if self._config.dry_run:
            logger.info("Dry-run: would process %s", candidate.path)
            return Outcome(
                candidate=candidate,
                steps=tuple(
                    StepResult(a.action_type, StepStatus.DRY_RUN, a.target) for a in plan.actions
                ),
                status=OutcomeStatus.DRY_RUN,
            )

        if not candidate.path.is_dir() or candidate.path.is_symlink():
            error = f"Directory no longer exists: {candidate.path}"
            logger.warning(error)
            return skipped_outcome(candidate, plan, error, OutcomeStatus.PARTIALLY_FAILED)

        steps: list[StepResult] = []
        error: str | None = None

        for action in plan.actions:
            if error is not None:
                steps.append(StepResult(action.action_type, StepStatus.SKIPPED, action.target))
                continue
            try:
                target = self._run_step(plan, action)
            except ExecutionError as e:
                error = str(e)
                logger.error("%s failed for %s: %s", action.action_type.value, candidate.path, e)
            except Exception as e:
                error = f"Unexpected error: {e}"
                logger.exception("%s failed for %s", action.action_type.value, candidate.path)
            else:
                steps.append(StepResult(action.action_type, StepStatus.SUCCEEDED, target))
                continue
            steps.append(StepResult(action.action_type, StepStatus.FAILED, action.target, error))

        status = OutcomeStatus.COMPLETED if error is None else OutcomeStatus.PARTIALLY_FAILED
        return Outcome(candidate=candidate, steps=tuple(steps), status=status, error=error)

    def _run_step(self, plan: ActionPlan, action: PlannedAction) -> Path | None:
        """Dispatch one step; returns where the data ended up."""
        source = plan.candidate.path

        if action.action_type == ActionType.BACKUP:
            target = _require_target(action)
            backup_directory(source, target, expected_size=_expected_size(plan))
            return target

        if action.action_type == ActionType.ARCHIVE:
            target = _require_target(action)
            archive_directory(source, target)
            return target

        if action.action_type == ActionType.TRASH:
            try:
                return self._trash.move(source)
            except (TrashError, RuntimeError) as e:
                raise ExecutionError(str(e)) from e

        try:
            shutil.rmtree(source)
        except OSError as e:
            raise ExecutionError(f"Deletion failed: {e}") from e
        logger.info("Permanently deleted: %s", source)
        return None


def skipped_outcome(
    candidate: Candidate,
    plan: ActionPlan | None,
    error: str | None,
    status: OutcomeStatus,
) -> Outcome:
    """Outcome for a candidate none of whose steps ran."""
    steps: tuple[StepResult, ...] = ()
    if plan is not None:
        steps = tuple(
            StepResult(a.action_type, StepStatus.SKIPPED, a.target) for a in plan.actions
        )
    return Outcome(candidate=candidate, steps=steps, status=status, error=error)


def backup_directory(source: Path, target: Path, expected_size: int | None = None) -> None:
    """Copy a directory tree verbatim.

    A partial copy left by a failure stays in place and is named in the
    error.

    Args:
        source: Directory to copy.
        target: Destination path (must not exist).
        expected_size: Byte total the copy must contain, if known.

    Raises:
        ExecutionError: If the copy fails or is incomplete.
    """
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, target, symlinks=True)
    except (OSError, shutil.Error) as e:
        partial = f" (partial copy left at {target})" if target.exists() else ""
        raise ExecutionError(f"Backup failed: {e}{partial}") from e

    if expected_size is not None:
        copied = SizeAgeEvaluator().evaluate(target)
        if copied.partial or copied.size_bytes != expected_size:
            raise ExecutionError(
                f"Backup incomplete: copied {copied.size_bytes} of {expected_size} bytes "
                f"(partial copy left at {target})"
            )
    logger.info("Backed up %s to %s", source, target)


def archive_directory(source: Path, target: Path) -> None:
    """Write a deflated zip archive of a directory tree.

    Entries are stored relative to the source's parent, so the archive
    unpacks to ``<name>/...``. The archive is written to a ``.part`` file
    and renamed into place once verified; on failure nothing is left.

    Args:
        source: Directory to archive.
        target: Archive file path (must not exist).

    Raises:
        ExecutionError: If the archive cannot be written or verified.
    """
    part = target.with_name(target.name + _PART_SUFFIX)
    base = source.parent
    created = False
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(
            part, "x", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
        ) as zf:
            created = True
            zf.write(source, source.relative_to(base).as_posix())
            for dirpath, dirnames, filenames in os.walk(source, onerror=_reraise):
                dirnames.sort()
                current = Path(dirpath)
                for dirname in dirnames:
                    child = current / dirname
                    if child.is_symlink():
                        continue
                    zf.write(child, child.relative_to(base).as_posix())
                for filename in sorted(filenames):
                    child = current / filename
                    if child.is_symlink() or not child.is_file():
                        continue
                    zf.write(child, child.relative_to(base).as_posix())

        with zipfile.ZipFile(part) as zf:
            bad = zf.testzip()
        if bad is not None:
            raise ExecutionError(f"Archive verification failed at {bad}")
        os.replace(part, target)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        if created:
            part.unlink(missing_ok=True)
        raise ExecutionError(f"Archive failed: {e}") from e
    except ExecutionError:
        part.unlink(missing_ok=True)
        raise
    logger.info("Archived %s to %s", source, target)


def _reraise(error: OSError) -> None:
    raise error


def _require_target(action: PlannedAction) -> Path:
    if action.target is None:
        msg = f"{action.action_type.value} step has no destination"
        raise ExecutionError(msg)
    return action.target


def _expected_size(plan: ActionPlan) -> int | None:
    if plan.candidate.size_partial:
        return None
    return plan.candidate.size_bytes
