# ==============================================================================
# File: config.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial static settings for dircat (tool name, config and output file names).",
    "Added SNIFF_SIZE for the null-byte binary heuristic.",
    "Removed import-time ConfigManager instantiation; dynamic settings live in .dircat.json only.",
]
# ------------------------------------------------------------------------------
import argparse
import sys

from version_util import print_version_info

# --- Identity ---
TOOL_NAME = "dircat"

# --- File Names ---
CONFIG_NAME = ".dircat.json"               # Looked up in the current working directory.
DEFAULT_OUTPUT = "directorycontents.json"  # Written inside the scanned root.

# --- Scan Settings ---
SNIFF_SIZE = 8 * 1024     # Bytes inspected for a NUL byte before a file counts as text.
JSON_INDENT = 2


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Static settings for dircat.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    args = parser.parse_args()

    if args.version:
        print_version_info(__file__, "Static Configuration")
        sys.exit(0)
    else:
        parser.print_help()
