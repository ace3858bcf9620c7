"""Trash provider for the freedesktop.org Trash specification.

Works on the trash used by GNOME, KDE, COSMIC and most Linux file
managers. Every trash directory has a ``files/`` directory holding the
trashed items and an ``info/`` directory holding one ``.trashinfo`` file
per item::

    [Trash Info]
    Path=/home/user/Documents/report%20final.txt
    DeletionDate=2024-05-01T12:30:00

The home trash is ``$XDG_DATA_HOME/Trash``. Files on other filesystems go
to a trash at the top of their mount point, ``$topdir/.Trash/$uid`` or
``$topdir/.Trash-$uid``; relative ``Path`` values there start at
``$topdir``. Moving into the trash is delegated to send2trash, which picks
the right directory.
"""

import errno
import logging
import os
import shutil
import stat
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from urllib.parse import unquote

import psutil
from send2trash import send2trash

from recyclectl.core.errors import (
    NotFoundError,
    ProviderUnavailableError,
    RecycleError,
    RestoreCollisionError,
    map_os_error,
)
from recyclectl.core.paths import get_home_trash_dir
from recyclectl.trash.base import TrashProvider
from recyclectl.trash.models import TrashRecord

logger = logging.getLogger(__name__)

INFO_SUFFIX = ".trashinfo"
INFO_SECTION = "[Trash Info]"
DELETION_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Errors from os.link meaning "no hard link here", not "cannot move"
_NO_HARD_LINK = frozenset({errno.EXDEV, errno.EPERM, errno.EOPNOTSUPP, errno.EMLINK})


def parse_trash_info(text: str, base: Path) -> tuple[Path, datetime | None] | None:
    """Parse the content of a .trashinfo file.

    Args:
        text: File content.
        base: Directory that relative Path values are resolved against
            (the mount point for volume trashes).

    Returns:
        Tuple of (original path, deletion time), or None if the file has no
        [Trash Info] section or no Path key. The deletion time is naive
        local time, or None if missing or malformed.
    """
    original: Path | None = None
    deleted_at: datetime | None = None
    in_section = False

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("["):
            in_section = stripped == INFO_SECTION
            continue
        if not in_section or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if key == "Path" and original is None:
            original = Path(unquote(value))
        elif key == "DeletionDate" and deleted_at is None:
            try:
                deleted_at = datetime.strptime(value, DELETION_DATE_FORMAT)
            except ValueError:
                logger.debug("Malformed DeletionDate %r", value)

    if original is None:
        return None
    if not original.is_absolute():
        original = base / original
    return original, deleted_at


def mounted_filesystems() -> list[Path]:
    """Mount points of every mounted filesystem, pseudo filesystems included."""
    return [Path(partition.mountpoint) for partition in psutil.disk_partitions(all=True)]


@dataclass(frozen=True, slots=True)
class TrashDirectory:
    """One trash directory.

    Attributes:
        root: Directory holding files/ and info/.
        base: Directory relative Path values start from.
        home: True for the home trash, whose identifiers are bare names.
    """

    root: Path
    base: Path
    home: bool = False

    @property
    def files_dir(self) -> Path:
        return self.root / "files"

    @property
    def info_dir(self) -> Path:
        return self.root / "info"

    def identifier(self, name: str) -> str:
        """Identifier of the item stored as files/<name>."""
        return name if self.home else str(self.files_dir / name)


def volume_trash_dirs(top: Path, uid: int) -> list[TrashDirectory]:
    """Existing trash directories at the top of a mount point.

    ``$top/.Trash/$uid`` only counts when ``$top/.Trash`` is a real
    directory with the sticky bit set; ``$top/.Trash-$uid`` when it is a
    real directory.
    """
    found: list[TrashDirectory] = []

    shared = top / ".Trash"
    try:
        shared_mode = os.lstat(shared).st_mode
    except OSError:
        shared_mode = 0
    if stat.S_ISDIR(shared_mode) and shared_mode & stat.S_ISVTX:
        candidate = shared / str(uid)
        if os.path.isdir(candidate) and not os.path.islink(candidate):
            found.append(TrashDirectory(root=candidate, base=top))

    private = top / f".Trash-{uid}"
    if os.path.isdir(private) and not os.path.islink(private):
        found.append(TrashDirectory(root=private, base=top))

    return found


def _copy_exclusive(source: Path, destination: Path) -> None:
    """Copy a file or symlink to a destination that must not exist yet."""
    if source.is_symlink():
        os.symlink(os.readlink(source), destination)
        return

    with open(source, "rb") as src, open(destination, "xb") as dst:
        shutil.copyfileobj(src, dst)
    shutil.copystat(source, destination)


def move_no_clobber(source: Path, destination: Path) -> None:
    """Move a file, symlink or directory without ever replacing the destination.

    Files and links are hard-linked into place, or copied with exclusive
    creation where hard links are not possible, and then unlinked.
    Directories reserve the destination with mkdir before being renamed
    onto it.

    Raises:
        FileExistsError: If the destination exists.
        OSError: If the move fails for any other reason; ENOTEMPTY means
            the reserved directory was filled concurrently.
    """
    if source.is_dir() and not source.is_symlink():
        os.mkdir(destination)
        try:
            os.rename(source, destination)
        except OSError as e:
            if e.errno != errno.EXDEV:
                try:
                    os.rmdir(destination)
                except OSError as cleanup_error:
                    logger.warning("Cannot remove %s: %s", destination, cleanup_error)
                raise
            shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
            shutil.rmtree(source)
        return

    try:
        os.link(source, destination, follow_symlinks=False)
    except OSError as e:
        if e.errno not in _NO_HARD_LINK:
            raise
        _copy_exclusive(source, destination)
    os.unlink(source)


class FreedesktopTrashProvider(TrashProvider):
    """Home and per-volume trashes of the freedesktop.org Trash specification.

    Args:
        trash_dir: Home trash directory. Defaults to ``$XDG_DATA_HOME/Trash``
            (``~/.local/share/Trash``).
        mount_points: Mount points whose top-directory trashes are also
            used. Defaults to every mounted filesystem, looked up on each
            call.
    """

    def __init__(
        self,
        trash_dir: Path | None = None,
        mount_points: Iterable[Path] | None = None,
    ) -> None:
        self._root = trash_dir if trash_dir is not None else get_home_trash_dir()
        self._mount_points = list(mount_points) if mount_points is not None else None

    @property
    def name(self) -> str:
        return "freedesktop"

    @property
    def root(self) -> Path:
        """Home trash directory."""
        return self._root

    @property
    def files_dir(self) -> Path:
        return self._root / "files"

    @property
    def info_dir(self) -> Path:
        return self._root / "info"

    def is_available(self) -> bool:
        """Available on Linux and the BSDs; macOS and Windows use other bins."""
        return os.name == "posix" and sys.platform != "darwin"

    def trash_directories(self) -> list[TrashDirectory]:
        """The home trash followed by every volume trash that exists."""
        home = TrashDirectory(root=self._root, base=self._root.parent, home=True)
        directories = [home]
        seen = {os.path.realpath(self._root)}

        mount_points = (
            self._mount_points if self._mount_points is not None else mounted_filesystems()
        )
        uid = os.getuid()
        for top in sorted(set(mount_points)):
            for directory in volume_trash_dirs(top, uid):
                real = os.path.realpath(directory.root)
                if real in seen:
                    continue
                seen.add(real)
                directories.append(directory)

        return directories

    def trash_path(self, path: Path) -> None:
        if not os.path.lexists(path):
            raise NotFoundError(f"No such file or directory: {path}", path=path)

        try:
            send2trash(str(path))
        except OSError as e:
            raise map_os_error(e, path) from e

        logger.debug("Moved %s to the trash", path)

    def list_entries(self) -> list[TrashRecord]:
        if not self.is_available():
            raise ProviderUnavailableError(
                f"The freedesktop.org trash is not supported on {sys.platform}"
            )

        records: list[TrashRecord] = []
        for directory in self.trash_directories():
            try:
                records.extend(self._list_directory(directory))
            except OSError as e:
                if directory.home:
                    raise ProviderUnavailableError(
                        f"Cannot read trash directory {directory.info_dir}: {e.strerror or e}",
                        path=directory.info_dir,
                    ) from e
                logger.warning("Cannot read trash directory %s: %s", directory.info_dir, e)

        return records

    def _list_directory(self, directory: TrashDirectory) -> list[TrashRecord]:
        """Records of one trash directory.

        Raises:
            OSError: If the info directory cannot be listed.
        """
        if not directory.info_dir.is_dir():
            logger.debug("No trash info directory at %s", directory.info_dir)
            return []

        info_files = sorted(
            p for p in directory.info_dir.iterdir() if p.name.endswith(INFO_SUFFIX)
        )

        records: list[TrashRecord] = []
        for info_path in info_files:
            name = info_path.name[: -len(INFO_SUFFIX)]

            if not os.path.lexists(directory.files_dir / name):
                logger.warning("Ignoring trash info without content: %s", info_path)
                continue

            try:
                parsed = parse_trash_info(info_path.read_text(encoding="utf-8"), directory.base)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Cannot read trash info %s: %s", info_path, e)
                continue

            if parsed is None:
                logger.warning("Ignoring malformed trash info: %s", info_path)
                continue

            original, deleted_at = parsed
            records.append(
                TrashRecord(
                    identifier=directory.identifier(name),
                    original_path=original,
                    display_name=original.name,
                    deleted_at=deleted_at,
                )
            )

        return records

    def restore_entry(self, identifier: str) -> None:
        directory, content, info_path = self._locate(identifier)

        try:
            parsed = parse_trash_info(info_path.read_text(encoding="utf-8"), directory.base)
        except FileNotFoundError as e:
            raise NotFoundError(
                f"Trash entry {identifier} has no info file", path=identifier
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise RecycleError(f"Cannot read trash info {info_path}: {e}", path=identifier) from e

        if parsed is None:
            raise RecycleError(f"Malformed trash info {info_path}", path=identifier)

        original, _ = parsed
        collision = RestoreCollisionError(
            f"Cannot restore {original.name}: {original} already exists",
            path=original,
        )
        if os.path.lexists(original):
            raise collision

        try:
            original.parent.mkdir(parents=True, exist_ok=True)
            move_no_clobber(content, original)
        except FileExistsError as e:
            raise collision from e
        except OSError as e:
            if e.errno == errno.ENOTEMPTY:
                raise collision from e
            raise map_os_error(e, original) from e

        info_path.unlink(missing_ok=True)
        logger.debug("Restored %s to %s", identifier, original)

    def purge_entry(self, identifier: str) -> None:
        _, content, info_path = self._locate(identifier)

        try:
            if content.is_dir() and not content.is_symlink():
                shutil.rmtree(content)
            else:
                content.unlink()
            info_path.unlink(missing_ok=True)
        except OSError as e:
            raise map_os_error(e, content) from e

        logger.debug("Purged %s from the trash", identifier)

    def _locate(self, identifier: str) -> tuple[TrashDirectory, Path, Path]:
        """Return the trash directory, content and info paths of an entry.

        Bare identifiers name items in the home trash; absolute ones are the
        content path of an item in a volume trash.

        Raises:
            NotFoundError: If the identifier is invalid or its content is gone.
        """
        invalid = NotFoundError(f"Invalid trash entry identifier: {identifier!r}", path=identifier)

        if os.path.isabs(identifier):
            content = Path(identifier)
            directory = next(
                (
                    d
                    for d in self.trash_directories()
                    if not d.home and content.parent == d.files_dir
                ),
                None,
            )
            if directory is None:
                raise invalid
            name = content.name
        else:
            directory = TrashDirectory(root=self._root, base=self._root.parent, home=True)
            name = identifier
            content = directory.files_dir / name

        if not name or "/" in name or name in (".", ".."):
            raise invalid

        if not os.path.lexists(content):
            raise NotFoundError(f"Trash entry {identifier} not found", path=identifier)

        return directory, content, directory.info_dir / f"{name}{INFO_SUFFIX}"
