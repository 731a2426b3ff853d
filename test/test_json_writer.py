# ==============================================================================
# File: test/test_json_writer.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via _MAJOR_VERSION._MINOR_VERSION.PATCH>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial tests for the streaming JSON array writer.",
    "Added empty-bundle and exception-safety tests.",
    "Added bundle -> file -> load_entries round trip over a real tree.",
    "An interrupted write now leaves an unterminated array; added atomic_output replace/cleanup tests.",
]
# ------------------------------------------------------------------------------
import io
import json
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

# Ensure project root is in path for module imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from bundler import Entry, bundle
from json_writer import (
    JsonArrayWriter, atomic_output, dump_entries, entries_to_json, load_entries, load_entries_file, write_entries,
)

SAMPLE = [
    Entry("a.txt", ".", "hello"),
    Entry("b.txt", "sub", "line one\nline \"two\"\n"),
    Entry("c.md", "sub/deep", "café ✓ \t </script>"),
    Entry("empty.txt", ".", ""),
]


class TestJsonWriter(unittest.TestCase):

    def test_01_empty_bundle_is_empty_array(self):
        stream = io.StringIO()
        self.assertEqual(write_entries([], stream), 0)
        self.assertEqual(stream.getvalue(), "[]\n")
        self.assertEqual(json.loads(stream.getvalue()), [])
        self.assertEqual(entries_to_json([]), "[]\n")

    def test_02_streaming_matches_collect_all(self):
        stream = io.StringIO()
        count = write_entries(iter(SAMPLE), stream)
        self.assertEqual(count, len(SAMPLE))
        self.assertEqual(stream.getvalue(), entries_to_json(SAMPLE))

    def test_03_fields_always_present_in_order(self):
        data = json.loads(entries_to_json(SAMPLE))
        for item in data:
            self.assertEqual(list(item.keys()), ["filename", "directory", "content"])
        self.assertEqual(data[3]["content"], "")

    def test_04_non_ascii_written_verbatim(self):
        text = entries_to_json([SAMPLE[2]])
        self.assertIn("café ✓", text)

    def test_05_round_trip(self):
        self.assertEqual(load_entries(entries_to_json(SAMPLE)), SAMPLE)

    def test_06_failed_body_leaves_array_open(self):
        stream = io.StringIO()
        with self.assertRaises(RuntimeError):
            with JsonArrayWriter(stream) as writer:
                writer.write(SAMPLE[0])
                raise RuntimeError("interrupted")
        self.assertFalse(writer.closed)
        self.assertFalse(stream.getvalue().rstrip().endswith("]"))
        with self.assertRaises(ValueError):
            load_entries(stream.getvalue())

    def test_07_write_after_close_rejected(self):
        writer = JsonArrayWriter(io.StringIO())
        writer.close()
        writer.close()
        with self.assertRaises(ValueError):
            writer.write(SAMPLE[0])

    def test_08_load_rejects_malformed_bundles(self):
        for text in ['{"filename": "a"}',
                     '[1]',
                     '[{"filename": "a", "directory": "."}]',
                     '[{"filename": "a", "directory": ".", "content": 3}]',
                     '[']:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    load_entries(text)


class TestBundleRoundTrip(unittest.TestCase):

    def setUp(self):
        self.root = Path(tempfile.mkdtemp(prefix="dircat_json_"))
        self.out_dir = Path(tempfile.mkdtemp(prefix="dircat_out_"))

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)
        shutil.rmtree(self.out_dir, ignore_errors=True)

    def test_01_file_round_trip_preserves_bytes(self):
        files = {
            "a.txt": "hello".encode(),
            "sub/b.txt": "world\r\n".encode(),
            "sub/uni.txt": "naïve – ✓\n".encode(),
        }
        for rel, data in files.items():
            (self.root / rel).parent.mkdir(parents=True, exist_ok=True)
            (self.root / rel).write_bytes(data)
        (self.root / "blob.bin").write_bytes(b"\x00\x01\x02")

        entries = bundle(self.root)
        out_path = self.out_dir / "bundle.json"
        self.assertEqual(dump_entries(entries, out_path), 3)

        loaded = load_entries_file(out_path)
        self.assertEqual(loaded, entries)
        for e in loaded:
            rel = e.filename if e.directory == "." else f"{e.directory}/{e.filename}"
            self.assertEqual(e.content.encode('utf-8'), files[rel])

    def test_02_dump_replaces_existing_bundle(self):
        out_path = self.out_dir / "bundle.json"
        out_path.write_text("old", encoding='utf-8')
        dump_entries(SAMPLE, out_path)
        self.assertEqual(load_entries_file(out_path), SAMPLE)
        self.assertEqual(os.listdir(self.out_dir), ["bundle.json"])

    def test_03_failed_dump_keeps_previous_bundle(self):
        out_path = self.out_dir / "bundle.json"
        out_path.write_text("[]\n", encoding='utf-8')

        def interrupted():
            yield SAMPLE[0]
            raise KeyboardInterrupt

        with self.assertRaises(KeyboardInterrupt):
            dump_entries(interrupted(), out_path)

        self.assertEqual(out_path.read_text(encoding='utf-8'), "[]\n")
        self.assertEqual(os.listdir(self.out_dir), ["bundle.json"])

    def test_04_failed_first_dump_writes_nothing(self):
        out_path = self.out_dir / "bundle.json"
        with self.assertRaises(RuntimeError):
            with atomic_output(out_path) as f:
                f.write("[\n")
                raise RuntimeError("disk full")
        self.assertEqual(os.listdir(self.out_dir), [])


if __name__ == '__main__':
    unittest.main()
