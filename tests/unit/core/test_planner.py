"""Unit tests for deletion planning."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from dirpurge.core.errors import PlanningError
from dirpurge.core.planner import DeletionPlanner, path_digest
from dirpurge.models.candidate import Candidate
from dirpurge.models.config import DeletionConfig
from dirpurge.models.plan import ActionType


class TestPathDigest:
    """Tests for path_digest."""

    def test_stable_and_short(self) -> None:
        """Digest is deterministic and eight hex characters."""
        digest = path_digest(Path("/a/node_modules"))
        assert digest == path_digest(Path("/a/node_modules"))
        assert len(digest) == 8
        int(digest, 16)

    def test_differs_per_path(self) -> None:
        """Different paths give different digests."""
        assert path_digest(Path("/a/node_modules")) != path_digest(Path("/b/node_modules"))


class TestDeletionPlanner:
    """Tests for DeletionPlanner.plan."""

    def test_default_plan_is_trash(self, make_candidate: Callable[..., Candidate]) -> None:
        """Without options the only step is trash."""
        plan = DeletionPlanner(DeletionConfig(delete=True)).plan(make_candidate(create=False))
        assert [a.action_type for a in plan.actions] == [ActionType.TRASH]

    def test_no_trash_plans_remove(self, make_candidate: Callable[..., Candidate]) -> None:
        """--no-trash makes removal permanent."""
        plan = DeletionPlanner(DeletionConfig(delete=True, use_trash=False)).plan(
            make_candidate(create=False)
        )
        assert plan.terminal.action_type == ActionType.REMOVE

    def test_backup_and_archive_order(
        self, tmp_path: Path, make_candidate: Callable[..., Candidate]
    ) -> None:
        """Backup precedes archive, both precede the terminal step."""
        config = DeletionConfig(delete=True, backup=True, archive=True, backup_dir=tmp_path / "bk")
        candidate = make_candidate(create=False)

        plan = DeletionPlanner(config).plan(candidate)

        assert [a.action_type for a in plan.actions] == [
            ActionType.BACKUP,
            ActionType.ARCHIVE,
            ActionType.TRASH,
        ]
        stem = f"node_modules-{path_digest(candidate.path)}"
        assert plan.actions[0].target == (tmp_path / "bk").resolve() / stem
        assert plan.actions[1].target == (tmp_path / "bk").resolve() / f"{stem}.zip"

    def test_same_name_gets_distinct_targets(
        self, tmp_path: Path, make_candidate: Callable[..., Candidate]
    ) -> None:
        """Two candidates named alike never share a destination."""
        planner = DeletionPlanner(DeletionConfig(backup=True, backup_dir=tmp_path / "bk"))

        first = planner.plan(make_candidate(parent="a", create=False))
        second = planner.plan(make_candidate(parent="b", create=False))

        assert first.actions[0].target != second.actions[0].target

    def test_existing_destination_gets_suffix(
        self, tmp_path: Path, make_candidate: Callable[..., Candidate]
    ) -> None:
        """An occupied destination is skipped with a numeric suffix."""
        backup_dir = tmp_path / "bk"
        candidate = make_candidate(create=False)
        stem = f"node_modules-{path_digest(candidate.path)}"
        (backup_dir / stem).mkdir(parents=True)

        plan = DeletionPlanner(DeletionConfig(backup=True, backup_dir=backup_dir)).plan(candidate)

        assert plan.actions[0].target == backup_dir.resolve() / f"{stem}-1"

    def test_repeated_plan_reserves_new_target(
        self, tmp_path: Path, make_candidate: Callable[..., Candidate]
    ) -> None:
        """Planning the same candidate twice in one run yields two targets."""
        planner = DeletionPlanner(DeletionConfig(archive=True, backup_dir=tmp_path / "bk"))
        candidate = make_candidate(create=False)

        first = planner.plan(candidate).actions[0].target
        second = planner.plan(candidate).actions[0].target

        assert first is not None and second is not None
        assert second.name == first.name.replace(".zip", "-1.zip")

    def test_exhausted_destinations_raise(
        self, tmp_path: Path, make_candidate: Callable[..., Candidate]
    ) -> None:
        """PlanningError when no free destination exists."""
        planner = DeletionPlanner(DeletionConfig(backup=True, backup_dir=tmp_path / "bk"))

        with (
            patch.object(Path, "exists", return_value=True),
            pytest.raises(PlanningError, match="No free backup destination"),
        ):
            planner.plan(make_candidate(create=False))
