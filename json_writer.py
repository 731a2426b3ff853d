# ==============================================================================
# File: json_writer.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial collect-all JSON dump of bundle entries.",
    "Added JsonArrayWriter so entries are written as they are discovered instead of held in memory.",
    "Implemented context manager methods (__enter__, __exit__) so the array is always closed.",
    "BUG FIX: An empty bundle is written as '[]' instead of an opening bracket followed by a blank line.",
    "Streaming output is now byte-identical to json.dumps(indent=2) of the full list.",
    "Added load_entries() to parse a bundle back into Entry values.",
    "BUG FIX: The closing bracket is no longer written when the with-block raises, so an interrupted stream stays invalid JSON.",
    "Added atomic_output(): bundles are written to a hidden temp file and renamed into place on success.",
]
# ------------------------------------------------------------------------------
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, TextIO, Union
import argparse
import json
import os
import sys
import textwrap

import config
from bundler import Entry

ENTRY_FIELDS = ('filename', 'directory', 'content')


def entry_to_json(entry: Entry, indent: int = config.JSON_INDENT) -> str:
    return json.dumps(entry.to_dict(), indent=indent, ensure_ascii=False)


class JsonArrayWriter:
    """
    Writes a JSON array of entries one element at a time.
    As a context manager it closes the array only when the block succeeds, so a
    failed write never looks like a complete bundle.
    """

    def __init__(self, stream: TextIO, indent: int = config.JSON_INDENT):
        self.stream = stream
        self.indent = indent
        self.count = 0
        self.closed = False
        self._prefix = " " * indent

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()

    def write(self, entry: Entry):
        if self.closed:
            raise ValueError("write to a closed JsonArrayWriter")
        self.stream.write("[\n" if self.count == 0 else ",\n")
        self.stream.write(textwrap.indent(entry_to_json(entry, self.indent), self._prefix))
        self.count += 1

    def close(self):
        if self.closed:
            return
        self.stream.write("[]\n" if self.count == 0 else "\n]\n")
        self.stream.flush()
        self.closed = True


@contextmanager
def atomic_output(out_path: Union[str, Path]) -> Iterator[TextIO]:
    """
    Yields a text stream on a hidden temp file beside out_path. The temp file
    replaces out_path only if the block finishes; otherwise it is removed and
    any previous out_path is left untouched.
    """
    out_path = Path(out_path)
    tmp_path = out_path.with_name(f".{out_path.name}.{os.getpid()}.tmp")
    try:
        with open(tmp_path, 'w', encoding='utf-8', newline='\n') as f:
            yield f
        os.replace(tmp_path, out_path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def write_entries(entries: Iterable[Entry], stream: TextIO) -> int:
    """Streams entries into stream as one JSON array. Returns the number written."""
    with JsonArrayWriter(stream) as writer:
        for entry in entries:
            writer.write(entry)
    return writer.count


def dump_entries(entries: Iterable[Entry], out_path: Union[str, Path]) -> int:
    with atomic_output(out_path) as f:
        return write_entries(entries, f)


def entries_to_json(entries: Iterable[Entry]) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=config.JSON_INDENT, ensure_ascii=False) + "\n"


def load_entries(text: str) -> List[Entry]:
    """Parses a bundle document back into entries, validating every element."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("bundle must be a JSON array")

    entries = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"element {i} is not an object")
        for field in ENTRY_FIELDS:
            if not isinstance(item.get(field), str):
                raise ValueError(f"element {i}: field '{field}' missing or not a string")
        entries.append(Entry(item['filename'], item['directory'], item['content']))
    return entries


def load_entries_file(path: Union[str, Path]) -> List[Entry]:
    return load_entries(Path(path).read_text(encoding='utf-8'))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="JSON writer for dircat bundles.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--check', type=str, metavar='BUNDLE', help='Validate an existing bundle file and print its entries.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "JSON Bundle Writer")
        sys.exit(0)
    elif args.check:
        try:
            loaded = load_entries_file(args.check)
        except (OSError, ValueError) as e:
            print(f"❌ Invalid bundle {args.check}: {e}")
            sys.exit(1)
        for e in loaded:
            print(f"{e.directory}/{e.filename}")
        print(f"✅ {len(loaded)} entries")
    else:
        parser.print_help()
