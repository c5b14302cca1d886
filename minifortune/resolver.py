# minifortune/resolver.py
"""
Ties the stages together:

    path list --choose_random_path--> file or directory
    directory --choose_random_index_file--> x.dat
    file      --+ ".dat"--> x.dat
    x.dat     --locate_random_fragment--> FragmentLocation
    x         --extract--> Fragment
"""

from __future__ import annotations

import os
import random
from typing import Iterable, List, Optional

from minifortune.datio import locate_random_fragment
from minifortune.errors import NoFortuneSourceAvailable
from minifortune.extract import Fragment, extract
from minifortune.pathlist import choose_random_path, split_path_list
from minifortune.paths import fallback_paths, index_path_for, source_path_for
from minifortune.scanner import choose_random_index_file
from minifortune.utils import make_rng, trace


def _exists(path: str) -> bool:
    return os.path.isdir(path) or os.path.exists(index_path_for(path))


def usable_entries(path_list: str) -> List[str]:
    """Entries of path_list that exist on disk: a directory, or a file with its .dat beside it."""
    if not path_list:
        return []
    return [p for p in split_path_list(path_list) if _exists(p)]


def pick_source(fallbacks: Optional[Iterable[str]] = None, rng: Optional[random.Random] = None) -> str:
    """
    One existing fortune file or directory from the first fallback location
    (env path list, then the default directory) that has any. Missing entries
    of a path list are never chosen.
    """
    if rng is None:
        rng = make_rng()
    tried = list(fallback_paths() if fallbacks is None else fallbacks)
    for candidate in tried:
        entries = usable_entries(candidate)
        if entries:
            pick = entries[rng.randrange(len(entries))]
            trace(f"using fortune path {pick} from {candidate}")
            return pick
        trace(f"skipping unusable fortune path {candidate!r}")
    raise NoFortuneSourceAvailable(tried)


def index_path_from(path: str, rng: random.Random) -> str:
    if os.path.isdir(path):
        return choose_random_index_file(path, rng)
    return index_path_for(path)


def resolve_index_path(root: str, rng: random.Random) -> str:
    return index_path_from(choose_random_path(root, rng), rng)


def resolve_fortune(root: Optional[str] = None, rng: Optional[random.Random] = None,
                    fallbacks: Optional[Iterable[str]] = None) -> Fragment:
    """
    Produce one random fortune from root (a fortune file, a directory of them,
    or a colon separated list of either). With no root, the fallback locations
    are searched; NoFortuneSourceAvailable if none exist.
    """
    if rng is None:
        rng = make_rng()
    if root is None:
        index_path = index_path_from(pick_source(fallbacks, rng), rng)
    else:
        index_path = resolve_index_path(root, rng)

    fragment_id, loc = locate_random_fragment(index_path, rng)
    return extract(source_path_for(index_path), loc, fragment_id=fragment_id)
