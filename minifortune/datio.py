# minifortune/datio.py
"""
Reader for strfile(1) .dat index files.

Layout (all integers big-endian uint32):
    version          1 or 2
    numstr           N, number of fortunes
    longlen          length of the longest fortune
    shortlen         length of the shortest fortune
    flags            0x1 randomized, 0x2 ordered, 0x4 rotated (rot13, version 2 only)
    delim            1 byte + 3 pad bytes (version 2: always '%')
    offsets[...]     version 1: N entries
                     version 2: N+1 entries, the last one is the end-of-file offset

Version 1 only records where a fortune starts; its end is found by scanning
the text file for the delimiter line. Version 2 records where the next one
starts, so the length comes from subtracting neighbouring offsets.
"""

from __future__ import annotations

import os
import random
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from minifortune.errors import (
    CorruptIndex,
    EmptyIndex,
    FragmentOutOfRange,
    IndexOpenError,
    IndexTruncated,
    SeekError,
    UnsupportedVersion,
)
from minifortune.utils import trace

STR_RANDOM = 0x1
STR_ORDERED = 0x2
STR_ROTATED = 0x4

V2_DELIMITER = b"%"

_HEADER = struct.Struct(">IIIIIc3x")
HEADER_SIZE = _HEADER.size  # 24
_U32 = struct.Struct(">I")

SUPPORTED_VERSIONS = (1, 2)


def _read_u32(f: BinaryIO, path: str, what: str) -> int:
    b = f.read(4)
    if len(b) != 4:
        raise IndexTruncated(f"{path}: truncated offset table reading {what}")
    return _U32.unpack(b)[0]


@dataclass(frozen=True)
class FragmentLocation:
    """Where one fortune lives in the text file and how to read it back."""
    offset: int
    length: Optional[int]   # None -> scan for the delimiter (version 1)
    delimiter: bytes        # single byte
    rotated: bool = False


@dataclass(frozen=True)
class FormatV1:
    delimiter: bytes

    extra_entries = 0

    def location(self, f: BinaryIO, path: str, header: "IndexHeader", fragment_id: int) -> FragmentLocation:
        offset = _read_u32(f, path, f"fortune {fragment_id}")
        return FragmentLocation(offset=offset, length=None, delimiter=self.delimiter, rotated=False)


@dataclass(frozen=True)
class FormatV2:
    delimiter: bytes = V2_DELIMITER

    extra_entries = 1  # end-of-file sentinel

    def location(self, f: BinaryIO, path: str, header: "IndexHeader", fragment_id: int) -> FragmentLocation:
        offset = _read_u32(f, path, f"fortune {fragment_id}")
        next_offset = _read_u32(f, path, f"fortune {fragment_id + 1}")
        length = next_offset - offset
        # +2: the delimiter line "%\n" is counted in the gap between entries
        if length < 0 or length > header.max_fragment_len + 2:
            raise CorruptIndex(
                f"{path}: fortune {fragment_id} spans {length} bytes "
                f"(offsets {offset}..{next_offset}, longest is {header.max_fragment_len})"
            )
        return FragmentLocation(offset=offset, length=length, delimiter=self.delimiter,
                                rotated=header.rotated)


IndexFormat = Union[FormatV1, FormatV2]


@dataclass(frozen=True)
class IndexHeader:
    version: int
    fragment_count: int
    max_fragment_len: int
    max_short_len: int
    flags: int
    delimiter: bytes

    @classmethod
    def unpack(cls, buf: bytes) -> "IndexHeader":
        version, numstr, longlen, shortlen, flags, delim = _HEADER.unpack(buf)
        return cls(version, numstr, longlen, shortlen, flags, delim)

    @property
    def randomized(self) -> bool:
        return bool(self.flags & STR_RANDOM)

    @property
    def ordered(self) -> bool:
        return bool(self.flags & STR_ORDERED)

    @property
    def rotated(self) -> bool:
        # version 1 has no rotation flag
        return self.version == 2 and bool(self.flags & STR_ROTATED)

    @property
    def format(self) -> IndexFormat:
        if self.version == 1:
            return FormatV1(self.delimiter)
        return FormatV2()

    @property
    def table_entries(self) -> int:
        return self.fragment_count + self.format.extra_entries

    def describe(self) -> str:
        delim = self.format.delimiter.decode("latin-1")
        flags = [name for name, on in (("randomized", self.randomized),
                                       ("ordered", self.ordered),
                                       ("rotated", self.rotated)) if on]
        return "\n".join([
            f"str_version: {self.version}",
            f"str_numstr: {self.fragment_count}",
            f"str_longlen: {self.max_fragment_len}",
            f"str_shortlen: {self.max_short_len}",
            f"str_flags: {self.flags}" + (f" ({', '.join(flags)})" if flags else ""),
            f"str_delim: {delim}",
        ])


class DatReader:
    """
    Reads the header and individual offset-table entries of a .dat file.

    Typical usage:
        with DatReader("fortunes/wisdom.dat") as r:
            fid, loc = r.locate_random(rng)

    The file is opened on construction and closed by close() / the with block.
    """

    def __init__(self, path: str):
        self.path = path
        try:
            self.file = open(path, "rb")
        except OSError as e:
            raise IndexOpenError(f"Error opening fortune dat file {path}: {e.strerror or e}") from e
        try:
            self.header = self.read_header()
        except BaseException:
            self.file.close()
            raise

    def read_header(self) -> IndexHeader:
        self.file.seek(0)
        buf = self.file.read(HEADER_SIZE)
        if len(buf) != HEADER_SIZE:
            raise IndexTruncated(f"{self.path}: header is {len(buf)} bytes, expected {HEADER_SIZE}")
        header = IndexHeader.unpack(buf)
        if header.version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersion(self.path, header.version)
        return header

    def locate(self, fragment_id: int) -> FragmentLocation:
        """Resolve fragment_id (0-based, file order) to a FragmentLocation."""
        n = self.header.fragment_count
        if not 0 <= fragment_id < n:
            raise FragmentOutOfRange(f"{self.path}: fortune {fragment_id} out of range [0, {n})")
        table_end = HEADER_SIZE + self.header.table_entries * _U32.size
        if os.fstat(self.file.fileno()).st_size < table_end:
            raise IndexTruncated(f"{self.path}: offset table needs {self.header.table_entries} entries "
                                 f"({table_end} bytes), file is shorter")
        try:
            self.file.seek(HEADER_SIZE + fragment_id * _U32.size)
        except OSError as e:
            raise SeekError(f"Error seeking to fortune id {fragment_id} in {self.path}: {e}") from e
        return self.header.format.location(self.file, self.path, self.header, fragment_id)

    def locate_random(self, rng: random.Random) -> Tuple[int, FragmentLocation]:
        n = self.header.fragment_count
        if n == 0:
            raise EmptyIndex(f"{self.path}: index holds no fortunes")
        fragment_id = rng.randrange(n)
        loc = self.locate(fragment_id)
        trace(f"{self.path}: fortune {fragment_id}/{n} at offset {loc.offset}"
              + (f", {loc.length} bytes" if loc.length is not None else ", scan for delimiter"))
        return fragment_id, loc

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def read_header(index_path: str) -> IndexHeader:
    with DatReader(index_path) as r:
        return r.header


def locate_random_fragment(index_path: str, rng: random.Random) -> Tuple[int, FragmentLocation]:
    """Open index_path, pick a fortune uniformly at random, return (fragment_id, location)."""
    with DatReader(index_path) as r:
        return r.locate_random(rng)
