# minifortune/pathlist.py
"""
Colon separated path lists, PATH style.

    "a:b:c"      -> ["a", "b", "c"]
    ":a:"        -> [".", "a", "."]        empty entries mean the current directory
    "a\\:b:c"    -> ["a\\:b", "c"]          an escaped colon stays inside its token

The backslash of an escaped colon is kept in the returned token.
"""

from __future__ import annotations

import random
from typing import List

from minifortune.errors import EmptyInput
from minifortune.utils import trace

SEPARATOR = ":"
ESCAPE = "\\"
CURRENT_DIR = "."


def split_path_list(path_list: str) -> List[str]:
    """
    Return every token of path_list. Always 1 + number of unescaped colons entries.
    """
    if not path_list:
        raise EmptyInput("empty fortune path list")

    tokens: List[str] = []
    start = 0
    for i, ch in enumerate(path_list):
        if ch != SEPARATOR:
            continue
        if i > 0 and path_list[i - 1] == ESCAPE:
            continue
        tokens.append(path_list[start:i] or CURRENT_DIR)
        start = i + 1
    tokens.append(path_list[start:] or CURRENT_DIR)
    return tokens


def choose_random_path(path_list: str, rng: random.Random) -> str:
    """Pick one token of path_list uniformly at random."""
    tokens = split_path_list(path_list)
    pick = tokens[rng.randrange(len(tokens))]
    if len(tokens) > 1:
        trace(f"path list has {len(tokens)} entries, picked {pick!r}")
    return pick
