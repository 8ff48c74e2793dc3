"""Unit tests for the next-tag policy."""

from datetime import datetime, timedelta, timezone

import pytest

from gl_tagger.exceptions import VersionParseError
from gl_tagger.versioning import bump_patch, next_tag_name, parse_segments

CUTOFF = datetime(2024, 6, 1, tzinfo=timezone.utc)


class TestNeverTagged:
    """Projects without tags start at v1.0.0."""

    @pytest.mark.parametrize("latest", [None, ""])
    def test_initial_version(self, latest):
        assert next_tag_name(latest) == "v1.0.0"

    def test_initial_version_ignores_force(self):
        assert next_tag_name(None, forced=True) == "v1.0.0"


class TestBump:
    """Non-forced, non-expired tags get their patch segment incremented."""

    @pytest.mark.parametrize(
        "latest, expected",
        [
            ("v2.3.9", "v2.3.10"),
            ("v0.0.0", "v0.0.1"),
            ("1.4.2", "v1.4.3"),
            ("v10.20.30", "v10.20.31"),
        ],
    )
    def test_patch_increment(self, latest, expected):
        assert next_tag_name(latest) == expected

    def test_missing_segments_are_zero(self):
        assert next_tag_name("v1.2") == "v1.2.1"
        assert next_tag_name("v3") == "v3.0.1"

    @pytest.mark.parametrize(
        "latest",
        [
            "v1.2.3-rc1",
            "v1.2.3-hotfix",
            "v1.2.3-SNAPSHOT",
            "v1.2.3-alpha.beta",
            "v1.2.3+build.7",
            "v1.2.3-rc.1+build.7",
            "V1.2.3",
        ],
    )
    def test_prerelease_and_build_suffixes_ignored(self, latest):
        assert next_tag_name(latest) == "v1.2.4"

    def test_segments(self):
        assert parse_segments("v1.2.3-SNAPSHOT") == (1, 2, 3)

    @pytest.mark.parametrize("latest", ["release-5", "latest", "v1.x.0", "v1.2.3.4", "vv1.2.3"])
    def test_malformed_tag_raises(self, latest):
        with pytest.raises(VersionParseError) as exc_info:
            next_tag_name(latest)
        assert exc_info.value.tag_name == latest

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            bump_patch("not-a-version")


class TestRetagSameName:
    """Forced and expired runs re-issue the latest tag name."""

    def test_forced_returns_latest(self):
        assert next_tag_name("v2.3.9", forced=True) == "v2.3.9"

    def test_forced_does_not_parse(self):
        assert next_tag_name("release-5", forced=True) == "release-5"

    def test_commit_newer_than_cutoff_retags(self):
        committed = CUTOFF + timedelta(hours=1)
        assert next_tag_name("v2.3.9", committed, expired=CUTOFF) == "v2.3.9"

    def test_commit_older_than_cutoff_bumps(self):
        committed = CUTOFF - timedelta(hours=1)
        assert next_tag_name("v2.3.9", committed, expired=CUTOFF) == "v2.3.10"

    def test_commit_equal_to_cutoff_bumps(self):
        assert next_tag_name("v2.3.9", CUTOFF, expired=CUTOFF) == "v2.3.10"

    def test_no_cutoff_bumps(self):
        committed = CUTOFF + timedelta(days=365)
        assert next_tag_name("v2.3.9", committed, expired=None) == "v2.3.10"

    def test_cutoff_compared_across_timezones(self):
        committed = datetime(2024, 6, 1, 3, 0, tzinfo=timezone(timedelta(hours=2)))  # 01:00 UTC
        assert next_tag_name("v1.0.0", committed, expired=CUTOFF) == "v1.0.0"
