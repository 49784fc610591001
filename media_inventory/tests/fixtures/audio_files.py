#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Builders for small audio files used by the Media Inventory Tool tests.

ID3 tags are written with Mutagen; MP4, WAV and FLAC containers are laid out
by hand since only their structure (not playable audio) matters here.
"""

import hashlib
import struct
from pathlib import Path
from typing import Optional

from mutagen.id3 import ID3, TALB, TCOM, TCON, TDRC, TIT2, TPE1, TPE2, TPOS, TRCK

# Looks like an MPEG frame header followed by filler; never ends in "TAG"
AUDIO_PAYLOAD = b"\xff\xfb\x90\x64" + bytes(range(256)) * 8


def sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def md5_hex(path: Path) -> str:
    return hashlib.md5(Path(path).read_bytes()).hexdigest().upper()


def make_mp3(path: Path, title: str = "Song A", artist: str = "Artist",
             album: str = "Album", album_artist: str = "Various",
             composer: str = "Composer", genre: str = "Rock", year: str = "2004",
             track: str = "3/12", disk: str = "1/2",
             payload: bytes = AUDIO_PAYLOAD) -> Path:
    """Write payload and prepend an ID3v2.4 tag."""
    path = Path(path)
    path.write_bytes(payload)
    tags = ID3()
    tags.add(TIT2(encoding=3, text=title))
    tags.add(TPE1(encoding=3, text=artist))
    tags.add(TALB(encoding=3, text=album))
    tags.add(TPE2(encoding=3, text=album_artist))
    tags.add(TCOM(encoding=3, text=composer))
    tags.add(TCON(encoding=3, text=genre))
    tags.add(TDRC(encoding=3, text=year))
    tags.add(TRCK(encoding=3, text=track))
    tags.add(TPOS(encoding=3, text=disk))
    tags.save(str(path))
    return path


def id3v1_block(title: str, artist: str = "", album: str = "", year: str = "",
                track: int = 0, genre: int = 17) -> bytes:
    """A 128-byte ID3v1.1 tag."""
    def field(value: str, size: int) -> bytes:
        return value.encode("latin-1")[:size].ljust(size, b"\x00")
    return (b"TAG" + field(title, 30) + field(artist, 30) + field(album, 30)
            + field(year, 4) + field("", 28) + b"\x00" + bytes([track, genre]))


def make_id3v1_mp3(path: Path, title: str, payload: bytes = AUDIO_PAYLOAD, **kwargs) -> Path:
    path = Path(path)
    path.write_bytes(payload + id3v1_block(title, **kwargs))
    return path


def _atom(name: bytes, body: bytes) -> bytes:
    return struct.pack(">I4s", 8 + len(body), name) + body


def _text_item(name: bytes, value: str) -> bytes:
    # data atom: type 1 (UTF-8), locale 0
    return _atom(name, _atom(b"data", struct.pack(">II", 1, 0) + value.encode("utf-8")))


def make_m4a(path: Path, title: Optional[str] = "Song A", artist: str = "Artist",
             track: int = 0, track_total: int = 0, brand: bytes = b"M4A ",
             payload: bytes = AUDIO_PAYLOAD) -> Path:
    """ftyp + moov/udta/meta/ilst + mdat. title=None writes no ilst at all."""
    path = Path(path)
    ftyp = _atom(b"ftyp", brand + struct.pack(">I", 0) + brand + b"isom")
    if title is None:
        moov = _atom(b"moov", b"")
    else:
        items = _text_item(b"\xa9nam", title) + _text_item(b"\xa9ART", artist)
        if track:
            trkn = struct.pack(">II", 0, 0) + struct.pack(">HHHH", 0, track, track_total, 0)
            items += _atom(b"trkn", _atom(b"data", trkn))
        meta = _atom(b"meta", b"\x00\x00\x00\x00" + _atom(b"ilst", items))
        moov = _atom(b"moov", _atom(b"udta", meta))
    path.write_bytes(ftyp + moov + _atom(b"mdat", payload))
    return path


def _chunk(name: bytes, body: bytes) -> bytes:
    pad = b"\x00" if len(body) % 2 else b""
    return struct.pack("<4sI", name, len(body)) + body + pad


def make_wav(path: Path, payload: bytes = AUDIO_PAYLOAD, extra: bytes = b"") -> Path:
    """PCM WAV; `extra` becomes a trailing JUNK chunk."""
    path = Path(path)
    fmt = struct.pack("<HHIIHH", 1, 2, 44100, 176400, 4, 16)
    body = b"WAVE" + _chunk(b"fmt ", fmt) + _chunk(b"data", payload)
    if extra:
        body += _chunk(b"JUNK", extra)
    path.write_bytes(struct.pack("<4sI", b"RIFF", len(body)) + body)
    return path


def make_flac(path: Path, comment: bytes = b"", payload: bytes = AUDIO_PAYLOAD) -> Path:
    """fLaC marker, STREAMINFO, a last VORBIS_COMMENT block, then frames."""
    path = Path(path)
    streaminfo = b"\x00" + (34).to_bytes(3, "big") + bytes(34)
    vorbis = b"\x84" + len(comment).to_bytes(3, "big") + comment
    path.write_bytes(b"fLaC" + streaminfo + vorbis + payload)
    return path
