"""Unit tests for debug-level ranking."""

import logging

import pytest

from hupconfig.schema.levels import DEBUG_LEVEL_RANKS, DebugLevel, level_at_least


class TestDebugLevel:
    """Tests for the DebugLevel enum."""

    @pytest.mark.unit
    def test_all_levels_defined(self) -> None:
        """Test that exactly the four levels are defined."""
        assert {level.value for level in DebugLevel} == {
            "error",
            "warning",
            "info",
            "verbose",
        }

    @pytest.mark.unit
    def test_ranks_are_ordered(self) -> None:
        """Test error < warning < info < verbose."""
        ranks = [level.rank for level in DebugLevel]
        assert ranks == sorted(ranks)
        assert DEBUG_LEVEL_RANKS["error"] < DEBUG_LEVEL_RANKS["verbose"]

    @pytest.mark.unit
    def test_logging_level_mapping(self) -> None:
        """Test mapping to standard library logging levels."""
        assert DebugLevel.VERBOSE.logging_level == logging.DEBUG
        assert DebugLevel.ERROR.logging_level == logging.ERROR


class TestLevelAtLeast:
    """Tests for level_at_least."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("current", "expected"),
        [
            ("error", False),
            ("warning", False),
            ("info", True),
            ("verbose", True),
        ],
    )
    def test_against_info(self, current: str, expected: bool) -> None:
        """Test comparison against info."""
        assert level_at_least(current, "info") is expected

    @pytest.mark.unit
    def test_comparison_is_by_rank_not_lexical(self) -> None:
        """Test that 'verbose' outranks 'warning' despite lexical order."""
        assert level_at_least("verbose", "warning") is True
        assert level_at_least("warning", "verbose") is False

    @pytest.mark.unit
    def test_unknown_current_level_never_matches(self) -> None:
        """Test that an unknown configured level ranks below all levels."""
        assert level_at_least("", "error") is False
        assert level_at_least("debug", "error") is False

    @pytest.mark.unit
    def test_unknown_requested_level_ranks_as_lowest(self) -> None:
        """Test that an unknown requested level is treated as rank 0."""
        assert level_at_least("error", "nonsense") is True
        assert level_at_least("verbose", "") is True

    @pytest.mark.unit
    def test_unknown_requested_level_matches_unknown_current(self) -> None:
        """Test that an unknown requested level is reached by any current level."""
        assert level_at_least("", "nonsense") is True
        assert level_at_least("debug", "nonsense") is True

    @pytest.mark.unit
    def test_accepts_enum_members(self) -> None:
        """Test that DebugLevel members compare like their values."""
        assert level_at_least(DebugLevel.INFO, DebugLevel.WARNING) is True
