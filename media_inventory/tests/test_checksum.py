#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for audio-only checksums: tag bytes must not affect the digest.
"""

import pytest

from media_inventory.scanning.checksum import audio_checksum, syncsafe
from media_inventory.tests.fixtures.audio_files import (
    AUDIO_PAYLOAD, id3v1_block, make_flac, make_id3v1_mp3, make_m4a, make_mp3,
    make_wav, md5_hex, sha1_hex,
)


def checksum_of(path, chunk_size=4096):
    with open(path, "rb") as f:
        return audio_checksum(f, chunk_size)


class TestAudioChecksum:
    def test_syncsafe(self):
        assert syncsafe(b"\x00\x00\x02\x01") == 257
        assert syncsafe(b"\x7f\x7f\x7f\x7f") == (1 << 28) - 1

    def test_id3v2_same_audio_different_tags(self, tmp_path):
        a = make_mp3(tmp_path / "a.mp3", title="Song A", genre="Rock")
        b = make_mp3(tmp_path / "b.mp3", title="Completely Different Title", genre="Jazz")
        assert md5_hex(a) != md5_hex(b)
        assert checksum_of(a) == checksum_of(b) == sha1_hex(AUDIO_PAYLOAD)

    def test_id3v2_with_trailing_id3v1(self, tmp_path):
        a = make_mp3(tmp_path / "a.mp3")
        with open(a, "ab") as f:
            f.write(id3v1_block("Song A"))
        assert checksum_of(a) == sha1_hex(AUDIO_PAYLOAD)

    def test_id3v2_different_audio(self, tmp_path):
        a = make_mp3(tmp_path / "a.mp3")
        b = make_mp3(tmp_path / "b.mp3", payload=AUDIO_PAYLOAD + b"\x00")
        assert checksum_of(a) != checksum_of(b)

    def test_id3v1_only(self, tmp_path):
        a = make_id3v1_mp3(tmp_path / "a.mp3", "First")
        b = make_id3v1_mp3(tmp_path / "b.mp3", "Second")
        assert checksum_of(a) == checksum_of(b) == sha1_hex(AUDIO_PAYLOAD)

    def test_mp4_hashes_mdat_only(self, tmp_path):
        a = make_m4a(tmp_path / "a.m4a", title="One")
        b = make_m4a(tmp_path / "b.m4a", title="Another one", track=1, track_total=2)
        assert md5_hex(a) != md5_hex(b)
        assert checksum_of(a) == checksum_of(b) == sha1_hex(AUDIO_PAYLOAD)

    def test_mp4_without_mdat_fails(self, tmp_path):
        path = tmp_path / "a.m4a"
        path.write_bytes(b"\x00\x00\x00\x10ftypM4A \x00\x00\x00\x00")
        with pytest.raises(ValueError):
            checksum_of(path)

    def test_wav_hashes_data_chunk(self, tmp_path):
        a = make_wav(tmp_path / "a.wav")
        b = make_wav(tmp_path / "b.wav", extra=b"tagged by some other program")
        assert checksum_of(a) == checksum_of(b) == sha1_hex(AUDIO_PAYLOAD)

    def test_flac_skips_metadata_blocks(self, tmp_path):
        a = make_flac(tmp_path / "a.flac", comment=b"title=One")
        b = make_flac(tmp_path / "b.flac", comment=b"title=Something else")
        assert checksum_of(a) == checksum_of(b) == sha1_hex(AUDIO_PAYLOAD)

    def test_ogg_hashes_whole_file(self, tmp_path):
        path = tmp_path / "a.ogg"
        data = b"OggS" + AUDIO_PAYLOAD
        path.write_bytes(data)
        assert checksum_of(path) == sha1_hex(data)

    @pytest.mark.parametrize("chunk_size", [1, 7, 4096, 1 << 20])
    def test_chunk_size_does_not_matter(self, tmp_path, chunk_size):
        a = make_mp3(tmp_path / "a.mp3")
        assert checksum_of(a, chunk_size) == sha1_hex(AUDIO_PAYLOAD)
