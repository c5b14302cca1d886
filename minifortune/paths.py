# minifortune/paths.py

import os

# --- Index files ---
INDEX_SUFFIX = ".dat"            # strfile side-car index, appended to the source path

# --- Default fortune locations ---
DEFAULT_FORTUNE_DIR = "/usr/share/games/fortunes"

# --- Environment ---
FORTUNE_PATH_ENV = "FORTUNE_PATH"        # file, directory or colon path list
DEBUG_ENV = "MINIFORTUNE_DEBUG"          # set to 1 for trace output on stderr


def index_path_for(source_path: str) -> str:
    return source_path + INDEX_SUFFIX


def source_path_for(index_path: str) -> str:
    """Strip the index suffix; the result names the fortune text file."""
    if not index_path.endswith(INDEX_SUFFIX):
        raise ValueError(f"{index_path}: not an index file (expected {INDEX_SUFFIX} suffix)")
    return index_path[:-len(INDEX_SUFFIX)]


def fallback_paths():
    """
    Ordered list of locations to try when no path is given on the command line.
    The environment is read at call time so tests can monkeypatch it.
    """
    paths = []
    env = os.getenv(FORTUNE_PATH_ENV)
    if env:
        paths.append(env)
    paths.append(DEFAULT_FORTUNE_DIR)
    return paths
