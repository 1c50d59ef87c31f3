"""Tests for the path qualification predicate."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from resource_selector.formats import JsonFormat
from resource_selector.selection import ExclusionPolicy, PathQualifier, SelectorConfig

MB = 1024 * 1024


def _qualifier(
    base: Path,
    exclusions: list[str] | None = None,
    threshold: int = 0,
    claimed: set[Path] | None = None,
    search: Path | None = None,
) -> PathQualifier:
    return PathQualifier(
        JsonFormat(),
        base_dir=base,
        search_dir=search if search is not None else base,
        exclusions=ExclusionPolicy(exclusions or []),
        size_threshold_bytes=SelectorConfig(size_threshold_mb=threshold).size_threshold_bytes,
        claimed=claimed,
    )


def _check(qualifier: PathQualifier, path: Path) -> bool:
    return qualifier(path, path.stat())


def test_accepts_plain_resource(tmp_path: Path):
    f = tmp_path / "a.json"
    f.write_text("{}")
    assert _check(_qualifier(tmp_path), f)


def test_rejects_other_formats(tmp_path: Path):
    f = tmp_path / "a.yaml"
    f.write_text("a: 1")
    assert not _check(_qualifier(tmp_path), f)


def test_rejects_directories_and_empty_files(tmp_path: Path):
    d = tmp_path / "dir.json"
    d.mkdir()
    empty = tmp_path / "empty.json"
    empty.touch()
    claimed: set[Path] = set()
    q = _qualifier(tmp_path, claimed=claimed)
    assert not _check(q, d)
    assert not _check(q, empty)
    assert claimed == set()


@pytest.mark.parametrize("skip", ["target", "build", "out", ".gradle", "node_modules", ".metadata"])
def test_rejects_skip_directory_segments(tmp_path: Path, skip: str):
    d = tmp_path / "module" / skip / "gen"
    d.mkdir(parents=True)
    f = d / "config.json"
    f.write_text("{}")
    claimed: set[Path] = set()
    assert not _check(_qualifier(tmp_path, exclusions=["**/config.json"], claimed=claimed), f)
    # Rejected before the exclusion check, so nothing is claimed.
    assert claimed == set()


def test_skip_names_are_relative_to_search_root(tmp_path: Path):
    search = tmp_path / "build" / "app"
    search.mkdir(parents=True)
    f = search / "a.json"
    f.write_text("{}")
    assert _check(_qualifier(tmp_path, search=search), f)


def test_already_claimed_is_rejected(tmp_path: Path):
    f = tmp_path / "a.json"
    f.write_text("{}")
    claimed = {f}
    assert not _check(_qualifier(tmp_path, claimed=claimed), f)
    assert claimed == {f}


def test_exclusion_claims_in_parse_mode(tmp_path: Path):
    f = tmp_path / "secrets.json"
    f.write_text("{}")
    claimed: set[Path] = set()
    assert not _check(_qualifier(tmp_path, exclusions=["secrets.json"], claimed=claimed), f)
    assert claimed == {f}


def test_enumeration_mode_is_pure(tmp_path: Path):
    excluded = tmp_path / "secrets.json"
    excluded.write_text("{}")
    big = tmp_path / "big.json"
    big.write_bytes(b" " * (MB + 1))
    q = _qualifier(tmp_path, exclusions=["secrets.json"], threshold=1)
    assert not q.parse_mode
    assert not _check(q, excluded)
    assert not _check(q, big)
    assert q.claimed is None


def test_size_threshold_claims_and_logs(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="resource_selector.selection")
    big = tmp_path / "big.json"
    big.write_bytes(b" " * (2 * MB + 10))
    claimed: set[Path] = set()
    assert not _check(_qualifier(tmp_path, threshold=1, claimed=claimed), big)
    assert claimed == {big}
    assert f"Skipping parsing {big} as its size 2Mb exceeds size threshold 1Mb" in caplog.text


def test_size_threshold_boundary(tmp_path: Path):
    exact = tmp_path / "exact.json"
    exact.write_bytes(b" " * MB)
    over = tmp_path / "over.json"
    over.write_bytes(b" " * (MB + 1))
    claimed: set[Path] = set()
    q = _qualifier(tmp_path, threshold=1, claimed=claimed)
    assert _check(q, exact)
    assert not _check(q, over)
    assert claimed == {over}


@pytest.mark.parametrize("threshold", [0, -1])
def test_non_positive_threshold_is_unlimited(tmp_path: Path, threshold: int):
    big = tmp_path / "big.json"
    big.write_bytes(b" " * (2 * MB))
    assert _check(_qualifier(tmp_path, threshold=threshold, claimed=set()), big)


def test_exclusion_wins_over_size_without_logging(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
):
    caplog.set_level(logging.INFO, logger="resource_selector.selection")
    big = tmp_path / "big.json"
    big.write_bytes(b" " * (2 * MB))
    claimed: set[Path] = set()
    assert not _check(_qualifier(tmp_path, ["big.json"], threshold=1, claimed=claimed), big)
    assert claimed == {big}
    assert "Skipping parsing" not in caplog.text
