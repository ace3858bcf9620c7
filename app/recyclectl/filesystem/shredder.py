"""Secure overwrite-then-delete engine.

Overwrites every byte of a regular file with pseudorandom data over
several passes, forcing each pass to stable storage before the next one
starts, then removes the file's directory entry.

This defeats ordinary undelete tools. It is not a forensic guarantee:
journaling, copy-on-write filesystems and SSD wear levelling may keep
older copies of the data elsewhere.
"""

import logging
import os
import random
from collections.abc import Callable
from dataclasses import dataclass

from recyclectl.core.config import DEFAULT_BLOCK_SIZE, DEFAULT_PASSES
from recyclectl.core.errors import PartialShredError, map_os_error
from recyclectl.filesystem.models import TargetPath

logger = logging.getLogger(__name__)

PassCallback = Callable[[TargetPath, int], None]
RandomFactory = Callable[[], random.Random]


def _seeded_random() -> random.Random:
    """Create a generator seeded from the OS entropy pool."""
    return random.Random(int.from_bytes(os.urandom(32), "big"))


@dataclass(frozen=True, slots=True)
class ShredConfig:
    """Parameters of one shred operation.

    Attributes:
        passes: Number of complete overwrite passes (at least 1).
        block_size: Size in bytes of each write.
    """

    passes: int = DEFAULT_PASSES
    block_size: int = DEFAULT_BLOCK_SIZE

    def __post_init__(self) -> None:
        """Validate shred parameters after initialization."""
        if self.passes < 1:
            msg = f"Pass count must be at least 1, got {self.passes}"
            raise ValueError(msg)
        if self.block_size < 1:
            msg = f"Block size must be positive, got {self.block_size}"
            raise ValueError(msg)


class ShredEngine:
    """Overwrites and deletes regular files.

    Attributes:
        config: Default parameters used when shred() gets none.
    """

    def __init__(
        self,
        config: ShredConfig | None = None,
        random_factory: RandomFactory | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Default shred parameters.
            random_factory: Creates the byte generator for one pass. Called
                once per pass so every pass is freshly seeded.
        """
        self.config = config or ShredConfig()
        self._random_factory = random_factory or _seeded_random

    def shred(
        self,
        target: TargetPath,
        config: ShredConfig | None = None,
        on_pass: PassCallback | None = None,
    ) -> None:
        """Overwrite a regular file and then delete it.

        If any pass fails the file is left in place, with its length
        unchanged and its content partially overwritten. Zero-length files
        are deleted without any overwrite.

        Args:
            target: File to destroy; must be of kind FILE.
            config: Parameters for this file (defaults to the engine's).
            on_pass: Called with (target, pass_number) after each pass has
                been flushed to storage.

        Raises:
            ValueError: If the target is not a regular file.
            PartialShredError: If an overwrite pass failed.
            RecycleError: If the file could not be opened or removed.
        """
        if not target.is_file:
            msg = f"Only regular files can be shredded, got {target.kind.value}: {target.path}"
            raise ValueError(msg)

        cfg = config or self.config

        try:
            handle = open(target.path, "r+b", buffering=0)
        except OSError as e:
            raise map_os_error(e, target.path) from e

        with handle:
            try:
                length = os.fstat(handle.fileno()).st_size
            except OSError as e:
                raise map_os_error(e, target.path) from e

            if length == 0:
                logger.debug("Empty file %s, nothing to overwrite", target.path)
            else:
                for pass_number in range(1, cfg.passes + 1):
                    try:
                        self._overwrite_pass(handle.fileno(), length, cfg.block_size)
                    except OSError as e:
                        logger.debug("Pass %d failed for %s: %s", pass_number, target.path, e)
                        raise PartialShredError(target.path, pass_number, e) from e

                    logger.debug("Pass %d/%d done for %s", pass_number, cfg.passes, target.path)
                    if on_pass is not None:
                        on_pass(target, pass_number)

        try:
            os.unlink(target.path)
        except OSError as e:
            raise map_os_error(e, target.path) from e

        logger.info("Shredded %s (%d bytes, %d passes)", target.path, length, cfg.passes)

    def _overwrite_pass(self, fd: int, length: int, block_size: int) -> None:
        """Write length pseudorandom bytes from offset 0 and force them to disk.

        Args:
            fd: File descriptor opened for reading and writing.
            length: Number of bytes to write.
            block_size: Maximum bytes per write call.

        Raises:
            OSError: On any write, seek or sync failure.
        """
        rng = self._random_factory()
        os.lseek(fd, 0, os.SEEK_SET)

        remaining = length
        while remaining > 0:
            chunk = rng.randbytes(min(block_size, remaining))
            view = memoryview(chunk)
            # os.write may write fewer bytes than asked
            while view:
                written = os.write(fd, view)
                if written == 0:
                    raise OSError(f"short write with {remaining} bytes left")
                view = view[written:]
            remaining -= len(chunk)

        os.fsync(fd)
