# ==============================================================================
# File: dircat.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial command line front end: 'dircat init' and 'dircat [path]'.",
    "Entries are streamed into the output file while the walk runs.",
    "Replaced the hand-rolled spinner with a tqdm progress bar on stderr (--no-progress to disable).",
    "Added --verbose to list every skipped path with its reason.",
    "Added -c/--config to point at a config file other than ./.dircat.json.",
    "Malformed ignore globs are reported as warnings before the scan.",
    "main() returns an exit code (1 on config, root or write failure) for the console script.",
    "RELIABILITY: The bundle is replaced only after a complete run; a failed or interrupted run leaves the previous file untouched.",
]
# ------------------------------------------------------------------------------
from pathlib import Path
from typing import Callable, List, Optional
import argparse
import sys

from tqdm import tqdm

import config
from bundler import Bundler, SkipReason
from config_manager import ConfigManager
from errors import ConfigNotFoundError, InvalidConfigError, RootAccessError
from json_writer import JsonArrayWriter, atomic_output

InputFunc = Callable[[str], str]


def _prompt(input_func: InputFunc, question: str) -> str:
    try:
        return input_func(question).strip()
    except EOFError:
        return ""


def init_config(config_path: Path, input_func: Optional[InputFunc] = None) -> int:
    """Interactive first-run setup. Writes the config file unless one already exists."""
    input_func = input_func or input
    if config_path.exists():
        print(f"⚠️  {config_path} already exists. Delete it first to re-init.")
        return 0

    print(f"Welcome to {config.TOOL_NAME} setup!\n")

    # 1) Output file name
    output_name = _prompt(input_func, f"1) Output file name (default: {config.DEFAULT_OUTPUT}): ")
    output_name = output_name or config.DEFAULT_OUTPUT

    # 2) Ignore globs. Hidden names are always skipped, so only the config and
    #    output files are listed by default.
    defaults = [config_path.name, output_name]
    raw = _prompt(input_func, f"2) Comma-separated ignore globs (default: {', '.join(defaults)}): ")
    ignores = [p.strip() for p in raw.split(',') if p.strip()] if raw else defaults

    try:
        ConfigManager.write_config(config_path, output_name, ignores)
    except OSError as e:
        print(f"❌ Unable to write {config_path}: {e}")
        return 1

    print(f"\n✅ Configuration written to {config_path}")
    print(f"Run `{config.TOOL_NAME} [path]` (default path is current dir) to bundle your files.")
    return 0


def _print_skip(rel_path: str, reason: SkipReason):
    tqdm.write(f"   skipped {rel_path} ({reason.value})")


def run_bundle(root: Path, config_path: Path, show_progress: bool = True, verbose: bool = False) -> int:
    """Loads the config, bundles root and writes root/<outputName>. Returns the exit code."""
    try:
        manager = ConfigManager(config_path)
    except ConfigNotFoundError as e:
        print(f"❌ Cannot load {config_path}: {e}\nPlease run `{config.TOOL_NAME} init` first.")
        return 1
    except InvalidConfigError as e:
        print(f"❌ Invalid {config_path}: {e}\nPlease delete it and run `{config.TOOL_NAME} init`.")
        return 1

    for bad in manager.invalid_patterns():
        print(f"⚠️  Ignoring malformed glob {bad!r}; it matches nothing.")

    bundler = Bundler(manager.effective_ignore_patterns(), on_skip=_print_skip if verbose else None)
    out_path = root / manager.OUTPUT_NAME

    try:
        entries = bundler.iter_entries(root)
    except RootAccessError as e:
        print(f"❌ {e}")
        return 1

    try:
        with atomic_output(out_path) as f, \
                tqdm(desc="Bundling", unit="file", file=sys.stderr, leave=False,
                     disable=not show_progress) as pbar:
            with JsonArrayWriter(f) as writer:
                for entry in entries:
                    pbar.set_postfix_str(f"{entry.directory}/{entry.filename}", refresh=False)
                    writer.write(entry)
                    pbar.update(1)
    except OSError as e:
        print(f"❌ Cannot write {out_path}: {e}")
        return 1

    print(f"✅ Done - processed {writer.count} files and wrote JSON bundle to {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=config.TOOL_NAME,
        description="Bundle every text file under a directory into one JSON document.",
        epilog=f"Run '{config.TOOL_NAME} init' first to create {config.CONFIG_NAME} in the current directory.",
    )
    parser.add_argument('path', nargs='?', default='.',
                        help="Directory to bundle (default: current dir), or 'init' to create the configuration.")
    parser.add_argument('-c', '--config', type=Path, default=ConfigManager.DEFAULT_CONFIG_FILE,
                        help=f"Configuration file (default: ./{config.CONFIG_NAME}).")
    parser.add_argument('--verbose', action='store_true', help='List every skipped path and why it was skipped.')
    parser.add_argument('--no-progress', action='store_true', help='Disable the progress bar.')
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "dircat Directory Bundler")
        return 0

    if args.path == "init":
        return init_config(args.config)

    return run_bundle(Path(args.path), args.config, show_progress=not args.no_progress, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
