# ==============================================================================
# File: bundler.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation of the directory walk producing (filename, directory, content) entries.",
    "Hidden names (leading '.') are skipped; hidden directories are pruned without descending.",
    "Ignore globs are matched against the root-relative path; matching directories are pruned.",
    "Added NUL-byte binary sniffing over the first SNIFF_SIZE bytes.",
    "PERFORMANCE: The sniffed prefix is reused for the content instead of seeking back and re-reading it.",
    "Replaced os.walk with a sorted scandir recursion so files and sub-directories interleave in name order.",
    "Filter decisions are returned as TraversalAction values from the pure classify_path().",
    "RELIABILITY: Per-entry OS errors are absorbed as SkipReason.UNREADABLE; only an unlistable root raises RootAccessError.",
    "Symlinks to directories, FIFOs and device files are skipped as NOT_REGULAR without being opened.",
    "Added iter_entries() for the streaming writer and an on_skip hook for verbose reporting.",
    "The walk dispatches on classify_path() instead of branching on filter_reason() itself.",
]
# ------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union
import argparse
import os
import posixpath
import sys

import config
from errors import EntryAccessError, RootAccessError
from glob_match import PatternSet

# --- CONSTANTS ---
ROOT_REL = "."


class TraversalAction(Enum):
    """What the walker does with one directory entry."""
    CONTINUE = "continue"   # collect a file / descend into a directory
    SKIP = "skip"           # drop this entry only
    PRUNE = "prune"         # drop a directory and everything below it


class SkipReason(Enum):
    HIDDEN = "hidden"
    IGNORED = "ignored"
    BINARY = "binary"
    UNREADABLE = "unreadable"
    NOT_REGULAR = "not a regular file"


SkipCallback = Callable[[str, SkipReason], None]


@dataclass(frozen=True)
class Entry:
    """One bundled text file."""
    filename: str
    directory: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'filename': self.filename,
            'directory': self.directory,
            'content': self.content,
        }


# --- Utility Functions ---
def sniff_binary(data: bytes, sniff_size: int = config.SNIFF_SIZE) -> bool:
    """True if a NUL byte appears within the first sniff_size bytes of data."""
    return b"\x00" in data[:sniff_size]


def decode_content(data: bytes) -> str:
    """
    Bytes are taken as UTF-8 as-is. Each maximal invalid subsequence becomes one
    U+FFFD, so a truncated multi-byte sequence yields a single replacement.
    """
    return data.decode('utf-8', errors='replace')


def split_rel_path(rel_path: str):
    """Returns (filename, directory) for a root-relative path, '.' for the root directory."""
    directory, filename = posixpath.split(rel_path)
    return filename, directory or ROOT_REL


def filter_reason(rel_path: str, patterns: PatternSet) -> Optional[SkipReason]:
    """
    Applies the name filters in priority order and returns the first that fires:
    hidden base name, then ignore glob. The root itself never matches.
    """
    if rel_path == ROOT_REL:
        return None
    if posixpath.basename(rel_path).startswith('.'):
        return SkipReason.HIDDEN
    if patterns.matches(rel_path):
        return SkipReason.IGNORED
    return None


def classify_path(rel_path: str, is_dir: bool, patterns: PatternSet) -> TraversalAction:
    """Decides what the walk does with one entry; filter_reason() gives the why."""
    if filter_reason(rel_path, patterns) is None:
        return TraversalAction.CONTINUE
    return TraversalAction.PRUNE if is_dir else TraversalAction.SKIP


def read_file(file_path: Path, sniff_size: int = config.SNIFF_SIZE) -> Optional[bytes]:
    """
    Reads a whole file, or returns None when the first sniff_size bytes contain
    a NUL byte. OS failures are re-raised as EntryAccessError.
    """
    try:
        with open(file_path, 'rb') as f:
            head = f.read(sniff_size)
            if sniff_binary(head, sniff_size):
                return None
            return head + f.read()
    except OSError as e:
        raise EntryAccessError(file_path, e) from e


def _sorted_listing(dir_path: Path) -> List[os.DirEntry]:
    with os.scandir(dir_path) as it:
        return sorted(it, key=lambda d: d.name)


class Bundler:
    """
    Walks a directory tree depth-first in name order and turns every text file
    that survives the filters into an Entry.

    Filters, first match wins: hidden base name, ignore glob (both prune whole
    directories), non-regular file, NUL byte in the first SNIFF_SIZE bytes.
    Anything that fails below the root is skipped; only an unlistable root
    raises RootAccessError.
    """

    def __init__(self, ignore_patterns: Iterable[str] = (), on_skip: Optional[SkipCallback] = None,
                 sniff_size: int = config.SNIFF_SIZE):
        self.patterns = PatternSet(ignore_patterns)
        self.on_skip = on_skip
        self.sniff_size = sniff_size

    @property
    def ignore_patterns(self) -> List[str]:
        return list(self.patterns.patterns)

    def bundle(self, root: Union[str, Path]) -> List[Entry]:
        return list(self.iter_entries(root))

    def iter_entries(self, root: Union[str, Path]) -> Iterator[Entry]:
        """
        Lists the root immediately (so RootAccessError surfaces at call time)
        and returns a generator over the remaining walk.
        """
        root_path = Path(root)
        try:
            listing = _sorted_listing(root_path)
        except OSError as e:
            raise RootAccessError(root_path, e) from e
        return self._walk_listing(listing, "")

    def _skip(self, rel_path: str, reason: SkipReason):
        if self.on_skip is not None:
            self.on_skip(rel_path, reason)

    def _walk_dir(self, dir_path: Path, rel_dir: str) -> Iterator[Entry]:
        try:
            listing = _sorted_listing(dir_path)
        except OSError:
            self._skip(rel_dir, SkipReason.UNREADABLE)
            return
        yield from self._walk_listing(listing, rel_dir)

    def _walk_listing(self, listing: List[os.DirEntry], rel_dir: str) -> Iterator[Entry]:
        for dir_entry in listing:
            rel_path = f"{rel_dir}/{dir_entry.name}" if rel_dir else dir_entry.name
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
            except OSError:
                self._skip(rel_path, SkipReason.UNREADABLE)
                continue

            action = classify_path(rel_path, is_dir, self.patterns)
            if action is not TraversalAction.CONTINUE:
                # PRUNE drops a whole directory by never recursing into it.
                self._skip(rel_path, filter_reason(rel_path, self.patterns))
                continue

            if is_dir:
                yield from self._walk_dir(Path(dir_entry.path), rel_path)
                continue

            entry = self._read_entry(dir_entry, rel_path)
            if entry is not None:
                yield entry

    def _read_entry(self, dir_entry: os.DirEntry, rel_path: str) -> Optional[Entry]:
        try:
            # Follows file symlinks; False for dangling links, FIFOs, devices, linked dirs.
            is_regular = dir_entry.is_file()
        except OSError:
            is_regular = False
        if not is_regular:
            self._skip(rel_path, SkipReason.NOT_REGULAR)
            return None

        try:
            data = read_file(Path(dir_entry.path), self.sniff_size)
        except EntryAccessError:
            self._skip(rel_path, SkipReason.UNREADABLE)
            return None
        if data is None:
            self._skip(rel_path, SkipReason.BINARY)
            return None

        filename, directory = split_rel_path(rel_path)
        return Entry(filename=filename, directory=directory, content=decode_content(data))


def bundle(root: Union[str, Path], ignore_patterns: Iterable[str] = ()) -> List[Entry]:
    """Scans root and returns an Entry for every text file that passes the filters."""
    return Bundler(ignore_patterns).bundle(root)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bundler core for dircat: lists the files a bundle of PATH would contain.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('path', nargs='?', help='Directory to scan.')
    parser.add_argument('--ignore', action='append', default=[], help='Ignore glob (repeatable).')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Bundler Core")
        sys.exit(0)
    elif args.path:
        try:
            for entry in bundle(args.path, args.ignore):
                print(f"{entry.directory}/{entry.filename} ({len(entry.content)} chars)")
        except RootAccessError as e:
            print(f"❌ {e}")
            sys.exit(1)
    else:
        parser.print_help()
