#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Audio-only checksums.

The digest covers the audio payload and skips the tag regions of the
container, so two copies of a track that differ only in their tags get the
same checksum.
"""

import hashlib
import struct
from typing import BinaryIO, Optional

from ..config import DEFAULT_CHUNK_SIZE
from .tags import FLAC_STREAM, ID3V1, ID3V1_SIZE, ID3V2, MP4, WAV, has_id3v1, identify


def audio_checksum(fh: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """SHA-1 hex digest of the audio payload of an open binary file.

    Containers with no separable tag region (Ogg) are hashed whole.
    """
    kind, head = identify(fh)
    h = hashlib.sha1()
    if kind == MP4:
        _sum_mp4(fh, h, chunk_size)
    elif kind == ID3V2:
        _sum_id3v2(fh, head, h, chunk_size)
    elif kind == ID3V1:
        end = _file_size(fh) - ID3V1_SIZE
        _hash_range(fh, h, 0, end, chunk_size)
    elif kind == FLAC_STREAM:
        _sum_flac(fh, h, chunk_size)
    elif kind == WAV:
        _sum_riff(fh, h, chunk_size)
    else:
        _hash_range(fh, h, 0, None, chunk_size)
    return h.hexdigest()


def _file_size(fh: BinaryIO) -> int:
    fh.seek(0, 2)
    return fh.tell()


def _read_exact(fh: BinaryIO, n: int) -> bytes:
    data = fh.read(n)
    if len(data) != n:
        raise EOFError(f"expected {n} bytes, got {len(data)}")
    return data


def _hash_range(fh: BinaryIO, h, start: int, end: Optional[int], chunk_size: int) -> None:
    """Feed bytes [start, end) into h; end=None reads to EOF."""
    fh.seek(start)
    remaining = None if end is None else max(0, end - start)
    while remaining is None or remaining > 0:
        n = chunk_size if remaining is None else min(chunk_size, remaining)
        chunk = fh.read(n)
        if not chunk:
            break
        h.update(chunk)
        if remaining is not None:
            remaining -= len(chunk)


def syncsafe(data: bytes) -> int:
    """Decode a 4-byte ID3v2 syncsafe integer (7 bits per byte)."""
    value = 0
    for b in data:
        value = (value << 7) | (b & 0x7F)
    return value


def _sum_id3v2(fh: BinaryIO, head: bytes, h, chunk_size: int) -> None:
    flags = head[5]
    start = 10 + syncsafe(head[6:10])
    if flags & 0x10:  # footer present
        start += 10
    end = _file_size(fh)
    if has_id3v1(fh):
        end -= ID3V1_SIZE
    _hash_range(fh, h, start, max(start, end), chunk_size)


def _sum_mp4(fh: BinaryIO, h, chunk_size: int) -> None:
    size = _file_size(fh)
    pos = 0
    found = False
    while pos + 8 <= size:
        fh.seek(pos)
        length, name = struct.unpack(">I4s", _read_exact(fh, 8))
        header = 8
        if length == 1:
            length = struct.unpack(">Q", _read_exact(fh, 8))[0]
            header = 16
        elif length == 0:
            length = size - pos
        if length < header:
            raise ValueError(f"invalid atom size {length} at offset {pos}")
        if name == b"mdat":
            _hash_range(fh, h, pos + header, pos + length, chunk_size)
            found = True
        pos += length
    if not found:
        raise ValueError("no mdat atom")


def _sum_flac(fh: BinaryIO, h, chunk_size: int) -> None:
    fh.seek(4)
    last = False
    while not last:
        block = _read_exact(fh, 4)
        last = bool(block[0] & 0x80)
        length = int.from_bytes(block[1:4], "big")
        fh.seek(length, 1)
    _hash_range(fh, h, fh.tell(), None, chunk_size)


def _sum_riff(fh: BinaryIO, h, chunk_size: int) -> None:
    size = _file_size(fh)
    pos = 12
    found = False
    while pos + 8 <= size:
        fh.seek(pos)
        name, length = struct.unpack("<4sI", _read_exact(fh, 8))
        if name == b"data":
            _hash_range(fh, h, pos + 8, min(pos + 8 + length, size), chunk_size)
            found = True
        pos += 8 + length + (length & 1)
    if not found:
        raise ValueError("no data chunk")
