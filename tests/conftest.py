"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from recyclectl.core.logging_setup import LOGGER_NAME
from recyclectl.trash.memory import InMemoryTrashProvider
from recyclectl.trash.models import TrashEntry, TrashRecord

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and data homes into the test's temporary directory.

    No test ever reads the real user config or touches the real trash.
    """
    xdg_root = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_root / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(xdg_root / "data"))
    return xdg_root


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Drop handlers a test attached to the package logger."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def make_record() -> Callable[..., TrashRecord]:
    """Factory for trash records; minutes_ago orders deletion times."""

    def _make(
        identifier: str,
        path: str,
        minutes_ago: int = 0,
    ) -> TrashRecord:
        original = Path(path)
        return TrashRecord(
            identifier=identifier,
            original_path=original,
            display_name=original.name,
            deleted_at=BASE_TIME - timedelta(minutes=minutes_ago),
        )

    return _make


@pytest.fixture
def make_entry(make_record: Callable[..., TrashRecord]) -> Callable[..., TrashEntry]:
    """Factory for snapshot entries."""

    def _make(identifier: str, path: str, minutes_ago: int = 0) -> TrashEntry:
        return TrashEntry.from_record(make_record(identifier, path, minutes_ago))

    return _make


@pytest.fixture
def sample_records(make_record: Callable[..., TrashRecord]) -> list[TrashRecord]:
    """A small trash with two similarly named reports."""
    return [
        make_record("report.txt", "/home/user/docs/report.txt", minutes_ago=30),
        make_record("report_final.txt", "/home/user/docs/report_final.txt", minutes_ago=10),
        make_record("holiday.jpg", "/home/user/pics/holiday.jpg", minutes_ago=60),
        make_record("notes.md", "/home/user/notes.md", minutes_ago=5),
    ]


@pytest.fixture
def memory_provider(sample_records: list[TrashRecord]) -> InMemoryTrashProvider:
    """In-memory trash holding the sample records."""
    return InMemoryTrashProvider(records=sample_records)
