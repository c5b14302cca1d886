# minifortune/extract.py
"""
Pull one fortune out of a fortune text file, given its FragmentLocation.

Two strategies:
  - length known (version 2 index): read exactly `length` bytes, then drop
    the trailing delimiter line if one is in the buffer
  - length unknown (version 1 index): scan for "<delim>\\n", then re-seek and
    read the measured span in one go

Rotated fortunes (rot13) are decoded after reading.
"""

from __future__ import annotations

from dataclasses import dataclass

from ftfy import fix_encoding

from minifortune.datio import FragmentLocation
from minifortune.errors import DelimiterNotFound, SeekError, ShortRead, SourceOpenError
from minifortune.utils import trace

_ROT13 = bytes.maketrans(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz",
    b"NOPQRSTUVWXYZABCDEFGHIJKLMnopqrstuvwxyzabcdefghijklm",
)

SCAN_CHUNK = 4096


def rot13(data: bytes) -> bytes:
    """Rotate ASCII letters by 13; everything else passes through. rot13(rot13(x)) == x."""
    return data.translate(_ROT13)


def decode_fragment(data: bytes) -> str:
    # fortune files predate utf-8: bytes that are not valid utf-8 are read as latin-1,
    # so every byte maps to a character, then ftfy repairs any mojibake
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        text = data.decode("latin-1")
    return fix_encoding(text)


@dataclass(frozen=True)
class Fragment:
    data: bytes
    source: str = ""
    fragment_id: int = -1

    @property
    def text(self) -> str:
        return decode_fragment(self.data)

    def __len__(self):
        return len(self.data)


def _seek(f, path: str, offset: int):
    try:
        f.seek(offset)
    except (OSError, ValueError, OverflowError) as e:
        raise SeekError(f"Error seeking to {offset} in fortune file {path}: {e}") from e


def _read_exact(f, path: str, n: int) -> bytes:
    buf = f.read(n)
    if len(buf) != n:
        raise ShortRead(f"Error reading fortune from {path}: wanted {n} bytes, got {len(buf)}")
    return buf


def read_known_length(f, path: str, loc: FragmentLocation) -> bytes:
    _seek(f, path, loc.offset)
    buf = _read_exact(f, path, loc.length)
    # The delimiter line is matched anywhere in the buffer, not only at its tail,
    # so a body containing "\n%\n" is cut short there.
    marker = b"\n" + loc.delimiter + b"\n"
    cut = buf.find(marker)
    if cut >= 0:
        return buf[:cut]
    return buf  # last fortune in the file, no closing delimiter


def measure_to_delimiter(f, path: str, loc: FragmentLocation) -> int:
    """
    Number of bytes from loc.offset up to (not including) the delimiter
    byte that is followed by a newline.
    """
    _seek(f, path, loc.offset)
    delim = loc.delimiter[0]
    prev = -1
    scanned = 0
    while True:
        chunk = f.read(SCAN_CHUNK)
        if not chunk:
            raise DelimiterNotFound(f"Error reading fortune from {path}: delimiter not found")
        for i, c in enumerate(chunk):
            if prev == delim and c == 0x0A:
                return scanned + i - 1
            prev = c
        scanned += len(chunk)


def read_scanned(f, path: str, loc: FragmentLocation) -> bytes:
    length = measure_to_delimiter(f, path, loc)
    _seek(f, path, loc.offset)
    return _read_exact(f, path, length)


def extract(source_path: str, loc: FragmentLocation, fragment_id: int = -1) -> Fragment:
    """Read the fortune at loc in source_path, rot13-decoded when the index says so."""
    try:
        f = open(source_path, "rb")
    except OSError as e:
        raise SourceOpenError(f"Error opening fortune file {source_path}: {e.strerror or e}") from e
    with f:
        if loc.length is not None:
            data = read_known_length(f, source_path, loc)
        else:
            data = read_scanned(f, source_path, loc)
    if loc.rotated:
        data = rot13(data)
    trace(f"{source_path}: read {len(data)} bytes" + (" (rot13)" if loc.rotated else ""))
    return Fragment(data=data, source=source_path, fragment_id=fragment_id)
