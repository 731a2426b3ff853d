# ==============================================================================
# File: glob_match.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial glob-to-regex translation for ignore patterns.",
    "BUG FIX: '*' and '?' no longer match across '/' (fnmatch did), so 'sub/x.log' is not caught by '*.log'.",
    "Added character classes with ranges, '^'/'!' negation and backslash escapes.",
    "Malformed patterns raise BadPatternError; PatternSet collects them in .invalid and matches nothing for them.",
    "Added escape() so literal file names can be used as patterns.",
]
# ------------------------------------------------------------------------------
import argparse
import re
import sys
from typing import Iterable, List, Tuple

from errors import BadPatternError

SEPARATOR = "/"
_SPECIAL = "\\*?["


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    """Reads one (possibly escaped) character of a [...] class starting at index i."""
    if i >= len(pattern):
        raise BadPatternError(pattern, "unterminated character class")
    c = pattern[i]
    if c in "-]":
        raise BadPatternError(pattern, f"unexpected {c!r} in character class")
    if c == "\\":
        i += 1
        if i >= len(pattern):
            raise BadPatternError(pattern, "unterminated character class")
        c = pattern[i]
    return c, i + 1


def _translate_class(pattern: str, i: int) -> Tuple[str, int]:
    """Translates the class whose opening '[' sits just before index i."""
    negate = False
    if i < len(pattern) and pattern[i] in "^!":
        negate = True
        i += 1

    items: List[str] = []
    while True:
        if i >= len(pattern):
            raise BadPatternError(pattern, "unterminated character class")
        if pattern[i] == "]" and items:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if lo > hi:
                raise BadPatternError(pattern, f"reversed range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))

    return ("[^" if negate else "[") + "".join(items) + "]", i


def translate(pattern: str) -> str:
    """
    Translates a shell glob into a regular expression matching the whole path.

    '*' matches any run of characters other than '/', '?' exactly one such
    character. There is no recursive '**'; it behaves like a single '*'.
    """
    parts: List[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            while i < n and pattern[i] == "*":
                i += 1
            parts.append(f"[^{SEPARATOR}]*")
        elif c == "?":
            parts.append(f"[^{SEPARATOR}]")
        elif c == "\\":
            if i >= n:
                raise BadPatternError(pattern, "trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            parts.append(cls)
        else:
            parts.append(re.escape(c))
    return "(?s:" + "".join(parts) + r")\Z"


def compile_pattern(pattern: str) -> re.Pattern:
    return re.compile(translate(pattern))


def match(pattern: str, path: str) -> bool:
    """Returns True if the whole path matches. A malformed pattern matches nothing."""
    try:
        regex = compile_pattern(pattern)
    except BadPatternError:
        return False
    return regex.match(path) is not None


def escape(name: str) -> str:
    """Returns a pattern that matches exactly the literal name."""
    return "".join("\\" + c if c in _SPECIAL else c for c in name)


class PatternSet:
    """
    An ordered list of ignore globs compiled once per bundle.
    Malformed patterns are kept in `invalid` and never match.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: List[str] = list(patterns)
        self.invalid: List[str] = []
        self._compiled: List[re.Pattern] = []
        for pattern in self.patterns:
            try:
                self._compiled.append(compile_pattern(pattern))
            except BadPatternError:
                self.invalid.append(pattern)

    def matches(self, path: str) -> bool:
        return any(regex.match(path) is not None for regex in self._compiled)

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"PatternSet({self.patterns!r})"


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Glob matcher for dircat ignore patterns.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--test', nargs=2, metavar=('PATTERN', 'PATH'), help='Report whether PATH matches PATTERN.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Glob Matcher")
        sys.exit(0)
    elif args.test:
        pattern, path = args.test
        try:
            print(f"{pattern!r} -> {translate(pattern)}")
        except BadPatternError as e:
            print(f"❌ {e}")
            sys.exit(1)
        print("✅ match" if match(pattern, path) else "no match")
    else:
        parser.print_help()
