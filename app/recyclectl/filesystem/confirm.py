"""Confirmation policy for recursing into directories.

Directories named on the command line are only expanded after the user
agrees, unless recursion was pre-authorized with --recurse. The decision
is taken once per top-level directory; its subdirectories inherit it.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import typer

logger = logging.getLogger(__name__)

Prompter = Callable[[Path], bool]


def prompt_recursion(path: Path) -> bool:
    """Ask the user whether to operate on a directory recursively.

    Blocks until the user answers. Anything but an explicit yes,
    including end-of-input or Ctrl+C at the prompt, counts as no.

    Args:
        path: Directory that is about to be expanded.

    Returns:
        True only for an affirmative answer.
    """
    try:
        return typer.confirm(
            f"{path} is a directory. Perform operation recursively?",
            default=False,
        )
    except (typer.Abort, EOFError):
        return False


class ConfirmationPolicy:
    """Decides whether a top-level directory may be expanded.

    Attributes:
        always_recurse: If True, every directory is accepted without prompting.
    """

    def __init__(self, always_recurse: bool = False, prompter: Prompter | None = None) -> None:
        """Initialize the policy.

        Args:
            always_recurse: Pre-authorize recursion (the --recurse flag).
            prompter: Callable asking the user about one directory.
                Defaults to an interactive terminal prompt.
        """
        self.always_recurse = always_recurse
        self._prompter = prompter or prompt_recursion

    def should_recurse(self, path: Path) -> bool:
        """Decide whether the directory at path may be expanded.

        Args:
            path: Top-level directory named by the user.

        Returns:
            True if the directory should be traversed.
        """
        if self.always_recurse:
            return True

        accepted = bool(self._prompter(path))
        logger.debug("Recursion into %s %s", path, "accepted" if accepted else "declined")
        return accepted
