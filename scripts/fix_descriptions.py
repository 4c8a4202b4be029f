#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import errno
import re
import sys
from pathlib import Path

# content/ beside the script, as in a checkout; an installed console script
# has no such folder and falls back to ./content
SCRIPT_CONTENT = Path(__file__).resolve().parent / "content"
DEFAULT_EXT = ".md"
DEFAULT_FIELD = "description"

def default_root() -> Path:
    if SCRIPT_CONTENT.is_dir():
        return SCRIPT_CONTENT
    return Path.cwd() / "content"

# -------- CLI --------

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Collapse multi-line front-matter fields (description = \"...\") into a single line, in place.")
    ap.add_argument("root", type=Path, nargs="?", default=None,
                    help="Content folder to walk recursively (default: content/ next to this script, else ./content)")
    ap.add_argument("--ext", default=DEFAULT_EXT, help="Comma-separated extensions to include, dot optional (e.g., .md,markdown)")
    ap.add_argument("--field", default=DEFAULT_FIELD, help="Field name to normalize (default: description)")
    ap.add_argument("-n", "--dry-run", action="store_true",
                    help="Report files that would change without rewriting them")
    ap.add_argument("-k", "--keep-going", action="store_true",
                    help="Report unreadable files/folders and continue instead of aborting on the first one")
    args = ap.parse_args(argv)
    if args.root is None:
        args.root = default_root()
    return args

def normalize_ext(ext: str) -> str:
    # "md" and ".md" both mean ".md"
    ext = ext.strip()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext

# -------- Field normalization --------

# Any whitespace run holding at least one line break
BREAK_RUN_RE = re.compile(r"\s*\n\s*")

def build_field_re(field: str) -> re.Pattern:
    # group 1: name, '=' and opening quote as written; group 2: value up to the next unescaped quote
    return re.compile(r'(\b%s\s*=\s*")((?:[^"\\]|\\[\s\S])*)"' % re.escape(field))

def clean_value(value: str) -> str:
    return BREAK_RUN_RE.sub(" ", value).strip()

def fix_fields(text: str, field: str = DEFAULT_FIELD) -> str:
    field_re = build_field_re(field)
    return field_re.sub(lambda m: f'{m.group(1)}{clean_value(m.group(2))}"', text)

# -------- I/O --------

# newline="" keeps CRLF files byte-identical when nothing changes
def read_text(p: Path) -> str:
    with open(p, "r", encoding="utf-8", newline="") as f:
        return f.read()

def write_text(p: Path, s: str):
    with open(p, "w", encoding="utf-8", newline="") as f:
        f.write(s)

def fix_file(path: Path, field: str = DEFAULT_FIELD, dry_run: bool = False) -> bool:
    """Normalize one file in place. Returns True if its content changed."""
    raw = read_text(path)
    fixed = fix_fields(raw, field)
    if fixed == raw:
        return False
    if not dry_run:
        write_text(path, fixed)
    return True

def should_take(path: Path, exts) -> bool:
    return path.name.endswith(tuple(exts))

def iter_files(root: Path, exts, onerror=None, _seen=None):
    """
    Depth-first walk yielding files under `root` whose names end with one of `exts`.

    Siblings come in sorted order. Directory symlinks are followed, but every
    real directory is entered once, so link cycles end the recursion.

    A folder that cannot be listed, or a matching name that is a dangling
    symlink, raises OSError. If `onerror` is given it receives the error
    instead (like os.walk) and the walk goes on.
    """
    if _seen is None:
        _seen = set()
    real = root.resolve()
    if real in _seen:
        return
    _seen.add(real)

    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        if onerror is None:
            raise
        onerror(e)
        return

    for entry in entries:
        if entry.is_dir():
            yield from iter_files(entry, exts, onerror, _seen)
        elif not should_take(entry, exts):
            continue
        elif entry.is_file():
            yield entry
        elif entry.is_symlink():
            e = FileNotFoundError(errno.ENOENT, "Dangling symlink", str(entry))
            if onerror is None:
                raise e
            onerror(e)

def fix_tree(root: Path, exts=(DEFAULT_EXT,), field: str = DEFAULT_FIELD,
             dry_run: bool = False, keep_going: bool = False):
    """
    Normalize every selected file under `root`.

    Fail-fast by default: the first read/write/listing error propagates. With
    keep_going, failures are printed to stderr and returned as
    (path, exception) pairs while the walk continues.

    Returns (changed, total, errors).
    """
    changed, total = [], 0
    errors = []
    label = "Would fix" if dry_run else "Fixed"

    def report(path, e):
        print(f"[ERR] {path}: {e}", file=sys.stderr)
        errors.append((path, e))

    def on_walk_error(e: OSError):
        report(Path(e.filename) if e.filename else root, e)

    for src in iter_files(root, exts, onerror=on_walk_error if keep_going else None):
        total += 1
        try:
            if fix_file(src, field, dry_run=dry_run):
                changed.append(src)
                print(f"{label}: {src}")
        except (OSError, UnicodeDecodeError) as e:
            if not keep_going:
                raise
            report(src, e)

    return changed, total, errors

def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.root.is_dir():
        raise SystemExit(f"Content folder not found: {args.root}")

    exts = {normalize_ext(e) for e in args.ext.split(",") if e.strip()}
    if not exts:
        raise SystemExit("No extensions given in --ext.")

    try:
        changed, total, errors = fix_tree(args.root, exts, args.field,
                                          dry_run=args.dry_run, keep_going=args.keep_going)
    except (OSError, UnicodeDecodeError) as e:
        raise SystemExit(f"Aborted: {e}")

    verb = "Would fix" if args.dry_run else "Fixed"
    print(f"\nDone. {verb} {len(changed)}/{total} files under: {args.root}")
    if errors:
        print(f"{len(errors)} path(s) could not be processed.", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
