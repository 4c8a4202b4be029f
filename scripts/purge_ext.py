#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Delete every file with a given extension from ONE folder (no recursion).

Directories are never removed, even when their name carries the extension.
Each deletion is independent: a failure is reported and the rest still run.

Usage:
  python purge_ext.py                 # .mdx files in the current folder
  python purge_ext.py ./site --ext tmp
  python purge_ext.py ./site -n       # only show what would go
"""

import argparse
import os
import sys
from pathlib import Path

DEFAULT_EXT = ".mdx"


def normalize_ext(ext: str) -> str:
    ext = ext.strip()
    if not ext or ext == ".":
        raise ValueError("Extension cannot be empty.")
    # "mdx" and ".mdx" both mean ".mdx"
    if not ext.startswith("."):
        ext = "." + ext
    return ext


def list_targets(directory: Path, ext: str) -> list[Path]:
    # one eager listing; entries created after this point are not considered
    targets = []
    for name in sorted(os.listdir(directory)):
        path = directory / name
        if path.is_dir():
            continue
        if os.path.splitext(name)[1] == ext:
            targets.append(path)
    return targets


def purge(directory: Path, ext: str = DEFAULT_EXT, dry_run: bool = False):
    """
    Remove the matching files of `directory`.
    Returns (deleted, errors) where errors holds (name, exception) pairs.
    """
    deleted, errors = [], []
    for path in list_targets(directory, ext):
        if dry_run:
            print(f"Would delete: {path.name}")
            deleted.append(path.name)
            continue
        try:
            path.unlink()
        except OSError as e:
            print(f"Error deleting {path.name}: {e}", file=sys.stderr)
            errors.append((path.name, e))
        else:
            print(f"Deleted: {path.name}")
            deleted.append(path.name)
    return deleted, errors


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Delete all files with a given extension from a single directory.")
    parser.add_argument("directory", type=Path, nargs="?", default=Path("."),
                        help="Directory to clean (default: current directory).")
    parser.add_argument("--ext", default=DEFAULT_EXT,
                        help=f"Extension to delete, with or without the dot (default: {DEFAULT_EXT}).")
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="List what would be deleted without removing anything.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        ext = normalize_ext(args.ext)
    except ValueError as e:
        raise SystemExit(str(e))

    try:
        deleted, errors = purge(args.directory, ext, dry_run=args.dry_run)
    except OSError as e:
        print(f"Error reading directory: {e}", file=sys.stderr)
        return 1

    verb = "Would delete" if args.dry_run else "Deleted"
    print(f"\n{verb} {len(deleted)} '{ext}' file(s), errors: {len(errors)}")
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
