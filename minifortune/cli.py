#!/usr/bin/env python3
"""
minifortune: print a random fortune from a strfile-indexed fortune file.

Run examples:
  minifortune
  minifortune /usr/share/games/fortunes
  minifortune fortunes/wisdom
  minifortune "fortunes:~/my-fortunes" --seed 7
  minifortune fortunes/wisdom --dump-header

With no path, $FORTUNE_PATH (file, directory or colon list) is used, then
/usr/share/games/fortunes.
"""

from __future__ import annotations

import argparse
import sys

from minifortune.datio import read_header
from minifortune.errors import FortuneError, NoFortuneSourceAvailable
from minifortune.resolver import index_path_from, pick_source, resolve_fortune, resolve_index_path
from minifortune.utils import make_rng

VERSION = "1.2.0"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="minifortune",
        description="Print a random fortune from a fortune file or directory.",
    )
    ap.add_argument("path", nargs="?", default=None,
                    help="fortune file, directory of fortune files, or colon separated list of either")
    ap.add_argument("--seed", type=int, default=None, help="seed the random source (reproducible picks)")
    ap.add_argument("--dump-header", action="store_true",
                    help="print the header of the chosen .dat index instead of a fortune")
    ap.add_argument("-V", "--version", action="version", version=f"%(prog)s version {VERSION}")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    rng = make_rng(args.seed)

    try:
        if args.dump_header:
            if args.path is None:
                index_path = index_path_from(pick_source(rng=rng), rng)
            else:
                index_path = resolve_index_path(args.path, rng)
            print(f"{index_path}:")
            print(read_header(index_path).describe())
            return 0

        fortune = resolve_fortune(args.path, rng=rng)
    except NoFortuneSourceAvailable as e:
        print(f"minifortune: {e}")
        return 0
    except FortuneError as e:
        print(f"minifortune: {e}", file=sys.stderr)
        return 1

    text = fortune.text
    sys.stdout.write(text if text.endswith("\n") else text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
