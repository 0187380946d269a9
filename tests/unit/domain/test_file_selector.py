"""Tests for automatic file selection."""

from __future__ import annotations

import time

from torrplay.domain.entities import CandidateFile, SelectionHints
from torrplay.domain.selection.file_selector import (
    auto_select,
    season_episode_patterns,
    select_by_filename,
    select_by_season_episode,
    select_largest_video,
)


def _files(*entries: tuple[str, int]) -> list[CandidateFile]:
    return [
        CandidateFile(id=i, path=path, length=length)
        for i, (path, length) in enumerate(entries, start=1)
    ]


# ---------------------------------------------------------------------------
# Filename
# ---------------------------------------------------------------------------


class TestSelectByFilename:
    def test_exact_basename_match(self, season_files: list[CandidateFile]) -> None:
        assert select_by_filename(season_files, "Show.S01E02.1080p.mkv") == 2

    def test_exact_match_is_case_insensitive(
        self, season_files: list[CandidateFile]
    ) -> None:
        assert select_by_filename(season_files, "SHOW.S01E02.1080P.MKV") == 2

    def test_exact_match_accepts_non_video(
        self, season_files: list[CandidateFile]
    ) -> None:
        assert select_by_filename(season_files, "info.nfo") == 5
        assert select_by_filename(season_files, "Show.S01E01.srt") == 4

    def test_exact_match_beats_earlier_substring_match(self) -> None:
        files = _files(("Old.Movie.mkv.backup.mkv", 10), ("Movie.mkv", 5))
        assert select_by_filename(files, "movie.mkv") == 2

    def test_substring_match_returns_first_video(
        self, season_files: list[CandidateFile]
    ) -> None:
        assert select_by_filename(season_files, "s01e02") == 2

    def test_substring_match_checks_full_path(self) -> None:
        files = _files(("Extras/clip.mkv", 10), ("Feature/movie.mkv", 20))
        assert select_by_filename(files, "feature") == 2

    def test_substring_skips_non_video(self) -> None:
        files = _files(("Show.S01E01.srt", 10), ("Show.S01E01.mkv", 20))
        assert select_by_filename(files, "s01e01") == 2

    def test_substring_only_non_video_returns_none(
        self, season_files: list[CandidateFile]
    ) -> None:
        assert select_by_filename(season_files, "info") is None

    def test_no_match(self, season_files: list[CandidateFile]) -> None:
        assert select_by_filename(season_files, "something else") is None


# ---------------------------------------------------------------------------
# Season / episode
# ---------------------------------------------------------------------------


class TestSeasonEpisodePatterns:
    def test_single_digit_values_are_padded(self) -> None:
        patterns = season_episode_patterns("1", "5")
        assert patterns[0] == "[Ss]01[Ee]05"
        assert patterns[2] == "1x05"
        assert patterns[3] == "01x05"

    def test_two_digit_values_are_unchanged(self) -> None:
        patterns = season_episode_patterns("10", "2")
        assert patterns[2] == "10x02"
        assert patterns[3] == "10x02"

    def test_prepadded_values_pass_through(self) -> None:
        patterns = season_episode_patterns("01", "05")
        assert patterns[0] == "[Ss]01[Ee]05"
        assert patterns[2] == "01x05"

    def test_verbose_pattern_uses_raw_values(self) -> None:
        patterns = season_episode_patterns("1", "5")
        assert "1" in patterns[4] and "01" not in patterns[4]


class TestSelectBySeasonEpisode:
    def test_largest_match_wins(self) -> None:
        files = _files(("Show.S01E05.mkv", 100), ("Show.S01E05.sample.mkv", 10))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_largest_match_wins_regardless_of_order(self) -> None:
        files = _files(("Show.S01E05.sample.mkv", 10), ("Show.S01E05.mkv", 100))
        assert select_by_season_episode(files, "1", "5") == 2

    def test_tie_keeps_first(self) -> None:
        files = _files(("a/Show.S01E05.mkv", 100), ("b/Show.S01E05.mkv", 100))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_lowercase_markers(self) -> None:
        files = _files(("show.s01e05.mkv", 100))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_dotted_form(self) -> None:
        files = _files(("Show.S01.E05.mkv", 100))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_raw_season_x_form(self) -> None:
        files = _files(("Show.1x05.avi", 100))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_padded_season_x_form(self) -> None:
        files = _files(("Show.01x05.avi", 100))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_two_digit_season(self) -> None:
        files = _files(("Show.10x02.avi", 100))
        assert select_by_season_episode(files, "10", "2") == 1

    def test_verbose_form(self) -> None:
        files = _files(("Show/Season 1/Show Season 1 Episode 5.mkv", 100))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_earlier_pattern_wins_over_larger_file(self) -> None:
        files = _files(("Show.1x05.mkv", 9_999), ("Show.S01E05.mkv", 1))
        assert select_by_season_episode(files, "1", "5") == 2

    def test_matches_whole_path(self) -> None:
        files = _files(("Show.S01E05/video.mkv", 100), ("other.mkv", 500))
        assert select_by_season_episode(files, "1", "5") == 1

    def test_non_video_is_ignored(self) -> None:
        files = _files(("Show.S01E05.srt", 100), ("Show.S01E05.nfo", 10))
        assert select_by_season_episode(files, "1", "5") is None

    def test_no_match_returns_none(self) -> None:
        files = _files(("Show.S02E01.mkv", 100), ("Movie.mkv", 900))
        assert select_by_season_episode(files, "1", "5") is None

    def test_metacharacter_hint_is_literal(self) -> None:
        files = _files(("Show.S01E05.mkv", 100), ("Show.(x05.mkv", 50))
        assert select_by_season_episode(files, "(", "5") == 2
        assert select_by_season_episode(files, ".", "5") is None

    def test_nested_quantifier_hint_returns_quickly(self) -> None:
        files = _files(("a" * 26 + ".mkv", 1))
        started = time.perf_counter()
        assert select_by_season_episode(files, "(a|a)*(a|a)*b", "5") is None
        assert time.perf_counter() - started < 1.0

    def test_season_list_fixture(self, season_files: list[CandidateFile]) -> None:
        # E02 has a full episode and a sample; the full episode is larger.
        assert select_by_season_episode(season_files, "1", "2") == 2


# ---------------------------------------------------------------------------
# Largest video
# ---------------------------------------------------------------------------


class TestSelectLargestVideo:
    def test_non_video_excluded(self) -> None:
        files = _files(("a.txt", 1000), ("b.mkv", 50), ("c.mp4", 200))
        assert select_largest_video(files) == 3

    def test_tie_keeps_first(self) -> None:
        files = _files(("a.mkv", 100), ("b.mkv", 100))
        assert select_largest_video(files) == 1

    def test_no_video(self) -> None:
        files = _files(("a.txt", 1000), ("b.nfo", 5))
        assert select_largest_video(files) is None

    def test_empty(self) -> None:
        assert select_largest_video([]) is None


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TestAutoSelect:
    def test_empty_list_ignores_hints(self) -> None:
        assert auto_select([], SelectionHints(filename="x.mkv")) is None
        assert auto_select([], SelectionHints()) is None

    def test_filename_takes_priority(self, season_files: list[CandidateFile]) -> None:
        hints = SelectionHints(filename="info.nfo", season="1", episode="2")
        assert auto_select(season_files, hints) == 5

    def test_filename_miss_does_not_fall_back(
        self, season_files: list[CandidateFile]
    ) -> None:
        hints = SelectionHints(filename="missing.mkv", season="1", episode="2")
        assert auto_select(season_files, hints) is None

    def test_season_episode_used_without_filename(
        self, season_files: list[CandidateFile]
    ) -> None:
        hints = SelectionHints(season="1", episode="2")
        assert auto_select(season_files, hints) == 2

    def test_season_episode_miss_does_not_fall_back(
        self, season_files: list[CandidateFile]
    ) -> None:
        hints = SelectionHints(season="3", episode="9")
        assert auto_select(season_files, hints) is None

    def test_season_without_episode_uses_largest(
        self, season_files: list[CandidateFile]
    ) -> None:
        assert auto_select(season_files, SelectionHints(season="1")) == 1

    def test_empty_strings_count_as_absent(
        self, season_files: list[CandidateFile]
    ) -> None:
        hints = SelectionHints(filename="", season="", episode="")
        assert auto_select(season_files, hints) == 1

    def test_no_hints_uses_largest(self, season_files: list[CandidateFile]) -> None:
        assert auto_select(season_files, SelectionHints()) == 1
