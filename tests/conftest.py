# tests/conftest.py
# Builds small fortune/.dat pairs on disk. Test-only: minifortune itself never writes indexes.
import struct

import pytest

from minifortune.datio import STR_ROTATED
from minifortune.extract import rot13


def write_dat(path, version, offsets, longlen=0, shortlen=0, flags=0, delim=b"%", count=None):
    if count is None:
        count = len(offsets) - 1 if version == 2 else len(offsets)
    with open(path, "wb") as f:
        f.write(struct.pack(">IIIIIc3x", version, count, longlen, shortlen, flags, delim))
        for off in offsets:
            f.write(struct.pack(">I", off))


def build_fortunes(dir_path, name, fortunes, version=2, delim=b"%", rotated=False):
    """
    Write dir_path/name (text) and dir_path/name.dat.
    Version 2 fortunes are followed by "\\n<delim>\\n" (strfile style); version 1
    fortunes by "<delim>\\n", so a delimiter scan gives the fortune back unchanged.
    Returns (source_path, index_path, offsets).
    """
    src = dir_path / name
    body = bytearray()
    offsets = []
    for text in fortunes:
        data = text.encode("utf-8") if isinstance(text, str) else text
        if rotated:
            data = rot13(data)
        offsets.append(len(body))
        body += data + (b"\n" if version == 2 else b"") + delim + b"\n"
    if version == 2:
        offsets.append(len(body))
    src.write_bytes(bytes(body))

    lens = [len(f.encode("utf-8") if isinstance(f, str) else f) + 1 for f in fortunes] or [0]
    flags = STR_ROTATED if rotated else 0
    dat = dir_path / (name + ".dat")
    write_dat(dat, version, offsets, longlen=max(lens), shortlen=min(lens), flags=flags, delim=delim)
    return str(src), str(dat), offsets


@pytest.fixture
def fortune_dir(tmp_path):
    d = tmp_path / "fortunes"
    d.mkdir()
    return d
