"""Unit tests for size and age evaluation."""

import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import patch

from dirpurge.filesystem.evaluator import SizeAgeEvaluator, age_since


class TestSizeAgeEvaluator:
    """Tests for SizeAgeEvaluator.evaluate."""

    def test_sums_regular_files(
        self, tmp_path: Path, write_file: Callable[[Path, int], Path]
    ) -> None:
        """Size is the recursive sum of regular files."""
        write_file(tmp_path / "d" / "a.bin", 100)
        write_file(tmp_path / "d" / "x" / "y" / "b.bin", 250)

        result = SizeAgeEvaluator().evaluate(tmp_path / "d")

        assert result.size_bytes == 350
        assert result.item_count == 4
        assert result.partial is False

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty directory has size zero and a known mtime."""
        (tmp_path / "empty").mkdir()

        result = SizeAgeEvaluator().evaluate(tmp_path / "empty")

        assert result.size_bytes == 0
        assert result.item_count == 0
        assert result.modified_at is not None

    def test_symlinks_not_followed(
        self, tmp_path: Path, write_file: Callable[[Path, int], Path]
    ) -> None:
        """Linked files and directories add nothing to the size."""
        write_file(tmp_path / "outside" / "big.bin", 5000)
        write_file(tmp_path / "d" / "own.bin", 10)
        (tmp_path / "d" / "file_link").symlink_to(tmp_path / "outside" / "big.bin")
        (tmp_path / "d" / "dir_link").symlink_to(tmp_path / "outside")

        result = SizeAgeEvaluator().evaluate(tmp_path / "d")

        assert result.size_bytes == 10

    def test_own_mtime_by_default(
        self, tmp_path: Path, write_file: Callable[[Path, int], Path]
    ) -> None:
        """Without contents tracking only the directory mtime counts."""
        directory = tmp_path / "d"
        newer = write_file(directory / "sub" / "new.bin", 1)
        old = datetime(2020, 1, 1, tzinfo=UTC).timestamp()
        new = datetime(2024, 1, 1, tzinfo=UTC).timestamp()
        os.utime(newer, (new, new))
        os.utime(directory, (old, old))

        result = SizeAgeEvaluator().evaluate(directory)

        assert result.modified_at == datetime(2020, 1, 1, tzinfo=UTC)

    def test_contents_age_tracking(
        self, tmp_path: Path, write_file: Callable[[Path, int], Path]
    ) -> None:
        """With contents tracking the newest entry wins."""
        directory = tmp_path / "d"
        newer = write_file(directory / "sub" / "new.bin", 1)
        old = datetime(2020, 1, 1, tzinfo=UTC).timestamp()
        new = datetime(2024, 1, 1, tzinfo=UTC).timestamp()
        os.utime(directory / "sub", (old, old))
        os.utime(newer, (new, new))
        os.utime(directory, (old, old))

        result = SizeAgeEvaluator(track_contents_age=True).evaluate(directory)

        assert result.modified_at == datetime(2024, 1, 1, tzinfo=UTC)

    def test_unreadable_subtree_is_partial(
        self, tmp_path: Path, write_file: Callable[[Path, int], Path]
    ) -> None:
        """Unreadable directories mark the evaluation partial."""
        write_file(tmp_path / "d" / "a.bin", 100)
        write_file(tmp_path / "d" / "locked" / "b.bin", 100)
        real_scandir = os.scandir

        def scandir(path: str) -> object:
            if str(path).endswith("locked"):
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        with patch("dirpurge.filesystem.evaluator.os.scandir", side_effect=scandir):
            result = SizeAgeEvaluator().evaluate(tmp_path / "d")

        assert result.partial is True
        assert result.size_bytes == 100


class TestAgeSince:
    """Tests for age_since."""

    def test_elapsed(self) -> None:
        """Age is the difference to the reference time."""
        now = datetime(2024, 1, 11, tzinfo=UTC)
        assert age_since(datetime(2024, 1, 1, tzinfo=UTC), now) == timedelta(days=10)

    def test_future_clamped(self) -> None:
        """Future timestamps give zero age."""
        now = datetime(2024, 1, 1, tzinfo=UTC)
        assert age_since(datetime(2024, 6, 1, tzinfo=UTC), now) == timedelta(0)

    def test_unknown(self) -> None:
        """Unknown modification time gives unknown age."""
        assert age_since(None) is None
