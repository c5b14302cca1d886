# minifortune/scanner.py

from __future__ import annotations

import os
import random
from typing import List

from minifortune.errors import DirectoryUnreadable, NoIndexFiles
from minifortune.paths import INDEX_SUFFIX
from minifortune.utils import trace


def is_index_name(name: str) -> bool:
    # at least one character before the suffix: "x.dat"
    return len(name) > len(INDEX_SUFFIX) and name.endswith(INDEX_SUFFIX)


def list_index_files(dir_path: str) -> List[str]:
    """
    Names of the .dat files in dir_path, sorted byte-wise so the
    enumeration is the same on every run.
    """
    try:
        names = os.listdir(dir_path)
    except OSError as e:
        raise DirectoryUnreadable(f"Error reading fortune directory {dir_path}: {e.strerror or e}") from e
    return sorted((n for n in names if is_index_name(n)), key=os.fsencode)


def choose_random_index_file(dir_path: str, rng: random.Random) -> str:
    names = list_index_files(dir_path)
    if not names:
        raise NoIndexFiles(f"no {INDEX_SUFFIX} files in {dir_path}")
    name = names[rng.randrange(len(names))]
    trace(f"{len(names)} index files in {dir_path}, picked {name}")
    return os.path.join(dir_path, name)
