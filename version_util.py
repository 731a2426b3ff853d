# ==============================================================================
# File: version_util.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation.",
    "Versioning uses the length of each module's '_CHANGELOG_ENTRIES' list as the patch number.",
    "Added --get_all command to audit the version and format status of all dircat modules.",
    "BUG FIX: Already-imported modules are reused instead of re-executed, and version-check loads are no longer registered in sys.modules.",
]
# ------------------------------------------------------------------------------

# Project modules audited by --get_all, relative to the project root.
VERSION_CHECK_FILES = [
    "version_util.py",
    "config.py",
    "config_manager.py",
    "errors.py",
    "glob_match.py",
    "bundler.py",
    "json_writer.py",
    "dircat.py",
    "test/test_all.py",
    "test/test_bundler.py",
    "test/test_config_manager.py",
    "test/test_dircat.py",
    "test/test_glob_match.py",
    "test/test_json_writer.py",
]

from pathlib import Path
from typing import Tuple
import sys
import argparse
import importlib.util

# --- Helper Functions for Dynamic Import ---

def _load_module_by_path(filepath: Path):
    """Returns the module for a file path, importing it under a private name if needed."""
    filepath = filepath.resolve()
    loaded = sys.modules.get(filepath.stem)
    loaded_file = getattr(loaded, '__file__', None)
    if loaded_file and Path(loaded_file).resolve() == filepath:
        return loaded

    spec = importlib.util.spec_from_file_location(f"_version_check_{filepath.stem}", filepath)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load spec for {filepath}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def get_version_parts(file_path) -> Tuple[object, object, int, list]:
    """Returns (major, minor, patch, changelog) for a module file."""
    module = _load_module_by_path(Path(file_path))
    changelog = list(getattr(module, '_CHANGELOG_ENTRIES', []))
    return (getattr(module, '_MAJOR_VERSION', 'ERR'),
            getattr(module, '_MINOR_VERSION', 'ERR'),
            len(changelog),
            changelog)


def get_all_file_versions(project_root: Path):
    """
    Checks the version status of all files in the project and reports the version
    and changelog format status in a table. Implements the --get_all command.
    """
    print("=" * 75)
    print("PROJECT VERSION AUDIT")
    print(f"Project Root: {project_root.resolve()}")
    print("=" * 75)
    print(f"{'FILE':<30}{'VERSION (M.m.P)':<18}{'CHANGELOG FORMAT':<18}")
    print("-" * 75)

    for filename in VERSION_CHECK_FILES:
        filepath = project_root / filename
        if not filepath.exists():
            print(f"{filename:<30}{'---':<18}{'FILE NOT FOUND':<18}")
            continue

        try:
            module = _load_module_by_path(filepath)
        except Exception:
            # Any error raised while executing the module body (syntax, import, ...)
            print(f"{filename:<30}{'---':<18}{'IMPORT FAILED':<18}")
            continue

        major = getattr(module, '_MAJOR_VERSION', 'ERR')
        minor = getattr(module, '_MINOR_VERSION', 'ERR')
        if hasattr(module, '_CHANGELOG_ENTRIES'):
            patch = len(module._CHANGELOG_ENTRIES)
            format_status = "✅ LIST-BASED"
        else:
            patch = "???"
            format_status = "❌ MISSING"
        print(f"{filename:<30}{f'{major}.{minor}.{patch}':<18}{format_status:<18}")

    print("=" * 75)


def print_version_info(file_path: str, component_name: str, print_changelog: bool = True):
    """
    Prints the version information and changelog for a single file
    by dynamically loading its variables.
    """
    file_path_obj = Path(file_path).resolve()

    try:
        major, minor, patch, changelog_list = get_version_parts(file_path_obj)
    except Exception as e:
        print(f"Component: {component_name}")
        print(f"Project: {file_path_obj.parent.name}")
        print(f"Version: Error printing version info (Import failed): {e}")
        return

    print(f"Component: {component_name}")
    print(f"Project: {file_path_obj.parent.name}")
    print(f"Version: {major}.{minor}.{patch}")

    if print_changelog:
        print("\nCHANGELOG:")
        for i, entry in enumerate(changelog_list, 1):
            print(f"    {i}. {entry}")


# Self-check logic for version_util.py itself
if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Version Utility")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information for this utility and exit.')
    parser.add_argument('--get_all', action='store_true', help='Perform a version audit across all project files.')
    args = parser.parse_args()

    project_root = Path(__file__).resolve().parent

    if args.version:
        print_version_info(__file__, "Version Utility (self-check)")
        sys.exit(0)
    elif args.get_all:
        get_all_file_versions(project_root)
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(0)
