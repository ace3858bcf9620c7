"""Unit tests for formatting helpers."""

from datetime import UTC, datetime

from recyclectl.utils.formatting import format_score, format_timestamp


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_naive_time_unchanged(self) -> None:
        """Naive times are printed as they are."""
        assert format_timestamp(datetime(2024, 5, 1, 9, 5, 3)) == "2024-05-01 09:05:03"

    def test_aware_time_in_local_zone(self) -> None:
        """Aware times are converted to local time first."""
        moment = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
        expected = moment.astimezone().strftime("%Y-%m-%d %H:%M:%S")

        assert format_timestamp(moment) == expected


class TestFormatScore:
    """Tests for format_score function."""

    def test_bands(self) -> None:
        """Scores are colored by band and shown as percentages."""
        assert format_score(1.0) == "[match_high]100%[/]"
        assert format_score(0.8) == "[match_medium]80%[/]"
        assert format_score(0.61) == "[match_low]61%[/]"
