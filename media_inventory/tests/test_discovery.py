#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for per-root file discovery.
"""

import os
from pathlib import Path

import pytest

from media_inventory.config import ScanConfig
from media_inventory.scanning import discovery
from media_inventory.scanning.discovery import RootScanner, discover_media_files


def touch(path: Path, data: bytes = b"x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "music"
    touch(root / "a.mp3")
    touch(root / "b.wma")
    touch(root / "c.txt")
    touch(root / "noext")
    touch(root / ".hidden.mp3")
    touch(root / ".trash" / "d.mp3")
    touch(root / ".trash" / "deeper" / "e.mp3")
    touch(root / "Artist" / "Album" / "01 Track.m4a")
    touch(root / "Artist" / ".AppleDouble" / "01 Track.m4a")
    touch(root / "Artist" / "Upper.MP3")
    return root


class TestRootScanner:
    def test_only_allowed_extensions_outside_hidden_entries(self, tree):
        names = sorted(Path(r.path).name for r in discover_media_files(tree))
        assert names == ["01 Track.m4a", "a.mp3", "b.wma"]

    def test_hidden_directory_prunes_subtree(self, tree):
        paths = [r.path for r in discover_media_files(tree)]
        assert not any(".trash" in p or ".AppleDouble" in p for p in paths)

    def test_extension_match_is_exact(self, tree):
        config = ScanConfig.build(extensions=[".MP3"])
        names = [Path(r.path).name for r in discover_media_files(tree, config)]
        assert names == ["Upper.MP3"]

    def test_records_carry_identity_only(self, tree):
        touch(tree / "sized.ogg", b"0123456789")
        (record,) = [r for r in discover_media_files(tree) if r.path.endswith("sized.ogg")]
        assert os.path.isabs(record.path)
        assert record.ext == ".ogg"
        assert record.size == 10
        assert record.mod_time.tzinfo is not None
        assert record.full_hash == ""
        assert record.format == ""
        assert record.year == 0

    def test_relative_root_yields_absolute_paths(self, tree, monkeypatch):
        monkeypatch.chdir(tree.parent)
        records = discover_media_files(Path("music"))
        assert records
        assert all(os.path.isabs(r.path) for r in records)

    def test_hidden_root_itself_is_scanned(self, tmp_path):
        root = tmp_path / ".library"
        touch(root / "song.mp3")
        assert len(discover_media_files(root)) == 1

    def test_missing_root_is_reported_not_raised(self, tmp_path, caplog):
        scanner = RootScanner(tmp_path / "nope", ScanConfig())
        emitted = []
        assert scanner.run(emitted.append) == 0
        assert scanner.failed
        assert emitted == []
        assert "FAILED to walk" in caplog.text

    def test_run_counts_emitted_records(self, tree):
        scanner = RootScanner(tree, ScanConfig())
        emitted = []
        assert scanner.run(emitted.append) == 3
        assert scanner.found == 3
        assert not scanner.failed

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinked_directories_are_not_followed(self, tmp_path):
        root = tmp_path / "root"
        touch(root / "real" / "song.mp3")
        os.symlink(root / "real", root / "link")
        assert len(discover_media_files(root)) == 1

    def test_unconvertible_mtime_skips_only_that_file(self, tree, monkeypatch, caplog):
        real = discovery.mod_time_from_stat
        bad_mtime = 1_000_000_000
        for offset, name in enumerate(["a.mp3", "b.wma", "Artist/Album/01 Track.m4a"]):
            stamp = bad_mtime + 100 * offset
            os.utime(tree / name, (stamp, stamp))

        def convert(st_mtime):
            if st_mtime == bad_mtime:
                raise ValueError("year is out of range")
            return real(st_mtime)

        monkeypatch.setattr(discovery, "mod_time_from_stat", convert)
        scanner = RootScanner(tree, ScanConfig())
        emitted = []

        assert scanner.run(emitted.append) == 2
        assert sorted(Path(r.path).name for r in emitted) == ["01 Track.m4a", "b.wma"]
        assert scanner.failed
        assert "FAILED to stat" in caplog.text
