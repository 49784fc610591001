#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Embedded tag reading for the Media Inventory Tool.

The container is identified from its leading (or, for ID3v1, trailing) bytes,
then the matching Mutagen reader parses the tags. Only tags are read; the
audio stream itself is never decoded.
"""

import re
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple

import mutagen
from mutagen.flac import FLAC
from mutagen.id3 import ID3
from mutagen.mp4 import Atoms, MP4MetadataError, MP4Tags
from mutagen.oggflac import OggFLAC
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE

# Container kinds returned by identify()
MP4 = "MP4"
ID3V2 = "ID3V2"
ID3V1 = "ID3V1"
FLAC_STREAM = "FLAC"
OGG = "OGG"
WAV = "WAV"

ID3V1_SIZE = 128
_MP4_BRANDS = {b"M4A ": "M4A", b"M4B ": "M4B", b"M4P ": "M4P", b"M4V ": "M4V"}
_LEADING_INT = re.compile(r"\s*(\d+)")


class UnsupportedFormatError(ValueError):
    """Raised when no known tag container is found in a file."""


@dataclass
class AudioTags:
    """Raw tag values; text is not sanitized here."""
    format: str
    file_type: str
    title: str = ""
    album: str = ""
    artist: str = ""
    album_artist: str = ""
    composer: str = ""
    genre: str = ""
    year: int = 0
    track_number: int = 0
    track_total: int = 0
    disk_number: int = 0
    disk_total: int = 0


def identify(fh: BinaryIO) -> Tuple[str, bytes]:
    """Return (container kind, first 12 bytes) and rewind the file."""
    fh.seek(0)
    head = fh.read(12)
    try:
        if head[4:8] == b"ftyp":
            return MP4, head
        if head[:3] == b"ID3":
            return ID3V2, head
        if head[:4] == b"fLaC":
            return FLAC_STREAM, head
        if head[:4] == b"OggS":
            return OGG, head
        if head[:4] == b"RIFF" and head[8:12] == b"WAVE":
            return WAV, head
        if has_id3v1(fh):
            return ID3V1, head
    finally:
        fh.seek(0)
    raise UnsupportedFormatError("no tags found")


def has_id3v1(fh: BinaryIO) -> bool:
    """Check for a trailing 128-byte 'TAG' block. Moves the file position."""
    fh.seek(0, 2)
    if fh.tell() < ID3V1_SIZE:
        return False
    fh.seek(-ID3V1_SIZE, 2)
    return fh.read(3) == b"TAG"


def read_tags(fh: BinaryIO) -> AudioTags:
    """Identify the container in an open binary file and read its tags.

    Raises UnsupportedFormatError for unknown containers and Mutagen errors
    for damaged tags.
    """
    kind, head = identify(fh)
    if kind == MP4:
        return _read_mp4(fh, head)
    if kind in (ID3V2, ID3V1):
        tags = ID3(fh)
        return _from_id3(tags, _id3_format(tags), "MP3")
    if kind == FLAC_STREAM:
        return _from_vorbis(FLAC(fh).tags, "FLAC")
    if kind == OGG:
        audio = mutagen.File(fh, options=[OggVorbis, OggOpus, OggFLAC])
        if audio is None:
            raise UnsupportedFormatError("unknown Ogg stream")
        return _from_vorbis(audio.tags, "OGG")
    if kind == WAV:
        tags = WAVE(fh).tags
        if tags is None:
            return AudioTags(format="RIFF", file_type="WAV")
        return _from_id3(tags, _id3_format(tags), "WAV")
    raise UnsupportedFormatError(f"no reader for {kind}")


def _id3_format(tags) -> str:
    major = tags.version[0]
    if major == 1:
        return "ID3v1"
    return f"ID3v2.{tags.version[1]}"


def _text(tags, key: str) -> str:
    frame = tags.get(key)
    if frame is None or not getattr(frame, "text", None):
        return ""
    return str(frame.text[0])


def _from_id3(tags, fmt: str, file_type: str) -> AudioTags:
    result = AudioTags(format=fmt, file_type=file_type)
    result.title = _text(tags, "TIT2")
    result.album = _text(tags, "TALB")
    result.artist = _text(tags, "TPE1")
    result.album_artist = _text(tags, "TPE2")
    result.composer = _text(tags, "TCOM")

    genre = tags.get("TCON")
    if genre is not None and genre.genres:
        result.genre = genre.genres[0]

    # v2.3 TYER is upgraded to TDRC on load
    result.year = parse_int(_text(tags, "TDRC"))
    result.track_number, result.track_total = parse_pair(_text(tags, "TRCK"))
    result.disk_number, result.disk_total = parse_pair(_text(tags, "TPOS"))
    return result


def _first(tags, *keys) -> str:
    for key in keys:
        values = tags.get(key)
        if values:
            return str(values[0])
    return ""


def _from_vorbis(tags, file_type: str) -> AudioTags:
    result = AudioTags(format="VORBIS", file_type=file_type)
    if tags is None:
        return result
    result.title = _first(tags, "title")
    result.album = _first(tags, "album")
    result.artist = _first(tags, "artist")
    result.album_artist = _first(tags, "albumartist", "album artist")
    result.composer = _first(tags, "composer")
    result.genre = _first(tags, "genre")
    result.year = parse_int(_first(tags, "date", "year"))

    result.track_number, result.track_total = parse_pair(_first(tags, "tracknumber"))
    if not result.track_total:
        result.track_total = parse_int(_first(tags, "tracktotal", "totaltracks"))
    result.disk_number, result.disk_total = parse_pair(_first(tags, "discnumber"))
    if not result.disk_total:
        result.disk_total = parse_int(_first(tags, "disctotal", "totaldiscs"))
    return result


def _read_mp4(fh: BinaryIO, head: bytes) -> AudioTags:
    result = AudioTags(format="MP4", file_type=_MP4_BRANDS.get(head[8:12], "MP4"))
    atoms = Atoms(fh)
    try:
        tags = MP4Tags(atoms, fh)
    except MP4MetadataError:
        # no moov/udta/meta/ilst: a tag-less but valid container
        return result

    result.title = _first(tags, "\xa9nam")
    result.album = _first(tags, "\xa9alb")
    result.artist = _first(tags, "\xa9ART")
    result.album_artist = _first(tags, "aART")
    result.composer = _first(tags, "\xa9wrt")
    result.genre = _first(tags, "\xa9gen")
    result.year = parse_int(_first(tags, "\xa9day"))

    trkn = tags.get("trkn")
    if trkn:
        result.track_number, result.track_total = trkn[0]
    disk = tags.get("disk")
    if disk:
        result.disk_number, result.disk_total = disk[0]
    return result


def parse_int(value: Optional[str]) -> int:
    """Leading integer of a tag value ('2004-05-01' -> 2004), 0 if none."""
    if not value:
        return 0
    m = _LEADING_INT.match(value)
    return int(m.group(1)) if m else 0


def parse_pair(value: Optional[str]) -> Tuple[int, int]:
    """Parse 'n/total' values such as TRCK; missing parts are 0."""
    if not value:
        return 0, 0
    number, _, total = value.partition("/")
    return parse_int(number), parse_int(total)
