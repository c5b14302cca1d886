# minifortune/utils.py
# Random source and trace helpers shared by every stage.
# Toggle trace output via env var: set MINIFORTUNE_DEBUG=1; otherwise trace() is a no-op.

import os
import random
import sys
import time

from minifortune.paths import DEBUG_ENV


def debug_enabled() -> bool:
    return os.getenv(DEBUG_ENV, "0") == "1"


def trace(msg: str):
    if debug_enabled():
        print(f"minifortune: {msg}", file=sys.stderr)


def make_rng(seed=None) -> random.Random:
    """
    Build the process random source. Seeded once per invocation:
    - explicit seed (tests, --seed) -> reproducible draws
    - otherwise 4 bytes from the OS entropy source
    - no entropy source -> time + pid, like the classic fortune
    """
    if seed is None:
        try:
            seed = int.from_bytes(os.urandom(4), "big")
        except NotImplementedError:
            seed = int(time.time()) + os.getpid()
    trace(f"random seed {seed}")
    return random.Random(seed)
