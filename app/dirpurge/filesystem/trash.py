"""Freedesktop-style trash for removed directories.

Trashed directories are moved to ``<trash>/files/<name>`` and described
by ``<trash>/info/<name>.trashinfo``, which records the original path and
deletion time so the entry can be restored by file managers or by
:meth:`Trash.restore`.
"""

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from urllib.parse import quote, unquote

from dirpurge.core.paths import ensure_dir, get_trash_dir

logger = logging.getLogger(__name__)

_INFO_SUFFIX = ".trashinfo"
_MAX_NAME_ATTEMPTS = 10_000


class TrashError(OSError):
    """Raised when a directory cannot be moved to or restored from the trash."""


@dataclass(frozen=True, slots=True)
class TrashEntry:
    """A directory stored in the trash.

    Attributes:
        name: Entry name under files/ and info/.
        original_path: Where the directory lived before trashing.
        deleted_at: Deletion time as recorded in the info file.
        files_path: Current location of the trashed directory.
    """

    name: str
    original_path: Path
    deleted_at: str
    files_path: Path


class Trash:
    """Moves directories into a trash location.

    Args:
        root: Trash directory. Defaults to the XDG user trash.
    """

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else get_trash_dir()

    @property
    def root(self) -> Path:
        """Trash root directory."""
        return self._root

    @property
    def files_dir(self) -> Path:
        """Directory holding trashed data."""
        return self._root / "files"

    @property
    def info_dir(self) -> Path:
        """Directory holding .trashinfo records."""
        return self._root / "info"

    def ensure(self) -> None:
        """Create the trash layout.

        Raises:
            RuntimeError: If the directories cannot be created.
        """
        ensure_dir(self.files_dir, "trash files")
        ensure_dir(self.info_dir, "trash info")

    def move(self, path: Path) -> Path:
        """Move a directory into the trash.

        The info record is written first. The directory is renamed into
        place; across filesystems it is copied and the original removed
        only after the copy completed.

        Args:
            path: Absolute path of the directory to trash.

        Returns:
            Location of the directory inside the trash.

        Raises:
            TrashError: If the directory could not be trashed. The
                original is left in place whenever the move did not
                complete.
        """
        self.ensure()
        name, info_path = self._reserve_name(path)
        destination = self.files_dir / name

        try:
            os.rename(path, destination)
        except OSError as e:
            if e.errno != errno.EXDEV:
                info_path.unlink(missing_ok=True)
                raise TrashError(f"Cannot move {path} to trash: {e}") from e
            self._copy_then_remove(path, destination, info_path)

        logger.info("Moved to trash: %s -> %s", path, destination)
        return destination

    def entries(self) -> list[TrashEntry]:
        """List entries that have an info record.

        Returns:
            Trash entries sorted by name.
        """
        if not self.info_dir.is_dir():
            return []

        result: list[TrashEntry] = []
        for info_path in sorted(self.info_dir.glob(f"*{_INFO_SUFFIX}")):
            try:
                entry = self._read_info(info_path)
            except (OSError, ValueError) as e:
                logger.warning("Skipping unreadable trash record %s: %s", info_path, e)
                continue
            result.append(entry)
        return result

    def restore(self, name: str) -> Path:
        """Move a trashed entry back to its original location.

        Args:
            name: Entry name as returned by :meth:`move` (its basename).

        Returns:
            The restored path.

        Raises:
            TrashError: If the entry is unknown or the original path is occupied.
        """
        info_path = self.info_dir / f"{name}{_INFO_SUFFIX}"
        try:
            entry = self._read_info(info_path)
        except (OSError, ValueError) as e:
            raise TrashError(f"Unknown trash entry {name}: {e}") from e

        if not entry.files_path.exists() and not entry.files_path.is_symlink():
            raise TrashError(f"Cannot restore {name}: {entry.files_path} is missing")
        if entry.original_path.exists():
            raise TrashError(f"Cannot restore {name}: {entry.original_path} already exists")

        try:
            entry.original_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(entry.files_path), str(entry.original_path))
        except OSError as e:
            raise TrashError(f"Cannot restore {name}: {e}") from e
        info_path.unlink(missing_ok=True)
        logger.info("Restored from trash: %s", entry.original_path)
        return entry.original_path

    def _reserve_name(self, path: Path) -> tuple[str, Path]:
        """Create an info record under a free name.

        The info file is created exclusively, which reserves the name
        against concurrent trashing of equally named directories.
        """
        content = (
            "[Trash Info]\n"
            f"Path={quote(str(path))}\n"
            f"DeletionDate={datetime.now().strftime('%Y-%m-%dT%H:%M:%S')}\n"
        )
        base = path.name
        for attempt in range(1, _MAX_NAME_ATTEMPTS + 1):
            name = base if attempt == 1 else f"{base}.{attempt}"
            if (self.files_dir / name).exists():
                continue
            info_path = self.info_dir / f"{name}{_INFO_SUFFIX}"
            try:
                with info_path.open("x", encoding="utf-8") as f:
                    f.write(content)
            except FileExistsError:
                continue
            except OSError as e:
                raise TrashError(f"Cannot write trash record for {path}: {e}") from e
            return name, info_path

        msg = f"No free trash name for {path}"
        raise TrashError(msg)

    @staticmethod
    def _copy_then_remove(path: Path, destination: Path, info_path: Path) -> None:
        """Cross-filesystem move; the original survives a failed copy."""
        logger.debug("Cross-device trash move, copying %s", path)
        try:
            shutil.copytree(path, destination, symlinks=True)
        except (OSError, shutil.Error) as e:
            shutil.rmtree(destination, ignore_errors=True)
            info_path.unlink(missing_ok=True)
            raise TrashError(f"Cannot copy {path} to trash: {e}") from e

        try:
            shutil.rmtree(path)
        except OSError as e:
            raise TrashError(
                f"Copied {path} to trash but could not remove the original: {e}"
            ) from e

    def _read_info(self, info_path: Path) -> TrashEntry:
        """Parse a .trashinfo record."""
        fields: dict[str, str] = {}
        for line in info_path.read_text(encoding="utf-8").splitlines():
            key, sep, value = line.partition("=")
            if sep:
                fields[key.strip()] = value.strip()

        if "Path" not in fields:
            msg = "missing Path"
            raise ValueError(msg)

        name = info_path.name[: -len(_INFO_SUFFIX)]
        return TrashEntry(
            name=name,
            original_path=Path(unquote(fields["Path"])),
            deleted_at=fields.get("DeletionDate", ""),
            files_path=self.files_dir / name,
        )
