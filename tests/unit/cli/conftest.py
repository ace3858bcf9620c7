"""Fixtures for CLI command tests."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest
from recyclectl.trash.memory import InMemoryTrashProvider
from recyclectl.utils.formatting import console, err_console


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from wrapping long temporary paths in captured output."""
    monkeypatch.setattr(console, "width", 200)
    monkeypatch.setattr(err_console, "width", 200)


@pytest.fixture
def trash_provider(memory_provider: InMemoryTrashProvider) -> Iterator[InMemoryTrashProvider]:
    """Serve the in-memory sample trash to every command."""
    with patch("recyclectl.cli.types.get_provider", return_value=memory_provider):
        yield memory_provider


@pytest.fixture
def empty_provider() -> Iterator[InMemoryTrashProvider]:
    """Serve an empty in-memory trash to every command."""
    provider = InMemoryTrashProvider()
    with patch("recyclectl.cli.types.get_provider", return_value=provider):
        yield provider
