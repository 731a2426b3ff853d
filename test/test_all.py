# ==============================================================================
# File: test_all.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Acts as the primary test runner by default (no flag).",
    "Implemented CustomTestResult and CustomTestRunner to print a PASS/FAIL/ERROR/SKIP summary table after the run.",
    "Test cases are loaded with TestLoader.loadTestsFromModule.",
    "Added --get_versions to run the project version audit instead of the tests.",
]
# ------------------------------------------------------------------------------
from pathlib import Path
from typing import List, Tuple
import argparse
import sys
import unittest

# Ensure project root and test dir are in path for module imports
TEST_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TEST_DIR.parent
for _p in (str(PROJECT_ROOT), str(TEST_DIR)):
    if _p not in sys.path:
        sys.path.insert(0, _p)

# --- Configuration for the Test Runner ---
TEST_MODULES = [
    "test_glob_match",
    "test_bundler",
    "test_json_writer",
    "test_config_manager",
    "test_dircat",
]

PASS, FAIL, ERROR, SKIP = '✅ PASS', '❌ FAIL', '🔴 ERROR', '⏭️ SKIP'


class CustomTestResult(unittest.TextTestResult):
    """Records (suite, test, status, details) for every test that runs."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.all_results: List[Tuple[str, str, str, str]] = []

    def _record(self, test, status, err=None, details=""):
        module_name = getattr(test, '__module__', 'Internal')
        method_name = getattr(test, '_testMethodName', str(test))
        if err:
            # The last line of the traceback carries the exception message
            lines = [line.strip() for line in self._exc_info_to_string(err, test).splitlines() if line.strip()]
            details = lines[-1] if lines else ""
        self.all_results.append((module_name, method_name, status, details))

    def addSuccess(self, test):
        super().addSuccess(test)
        self._record(test, PASS)

    def addFailure(self, test, err):
        super().addFailure(test, err)
        self._record(test, FAIL, err)

    def addError(self, test, err):
        super().addError(test, err)
        self._record(test, ERROR, err)

    def addSkip(self, test, reason):
        super().addSkip(test, reason)
        self._record(test, SKIP, details=reason)


def format_results_table(all_results, total_tests_run) -> str:
    """Formats the summary counts plus one aligned row per test."""
    passed = sum(1 for r in all_results if r[2] == PASS)
    failed = sum(1 for r in all_results if r[2] in (FAIL, ERROR))
    skipped = sum(1 for r in all_results if r[2] == SKIP)
    percentage = (passed / total_tests_run) * 100 if total_tests_run else 0

    lines = [
        f"Tests Run: {total_tests_run}   Passed: {passed}   Failed / Errored: {failed}   "
        f"Skipped: {skipped}   Passing: {percentage:.2f}%",
        "",
    ]

    header = ("Test Suite", "Test Name", "Status", "Details")
    rows = [(m.replace('test_', '').replace('_', ' ').title(), name, status, details.replace('|', '/'))
            for m, name, status, details in all_results]
    widths = [max(len(str(row[i])) for row in rows + [header]) + 2 for i in range(len(header))]

    def fmt(row):
        return "|" + "|".join(f" {str(cell):<{w - 1}}" for cell, w in zip(row, widths)) + "|"

    lines.append(fmt(header))
    lines.append("|" + "|".join('-' * w for w in widths) + "|")
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)


class CustomTestRunner(unittest.TextTestRunner):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault('stream', sys.stderr)
        kwargs.setdefault('verbosity', 2)
        super().__init__(*args, **kwargs)
        self.resultclass = CustomTestResult

    def run(self, test):
        result = super().run(test)
        print("\n" + "=" * 80)
        print("FINAL TEST EXECUTION SUMMARY")
        print("=" * 80)
        print(format_results_table(result.all_results, result.testsRun))
        print("=" * 80 + "\n")
        return result


def run_tests() -> bool:
    """Loads and runs all configured unit test modules using the CustomTestRunner."""
    print("=" * 60)
    print("🧪 RUNNING UNIT TESTS")
    print("=" * 60)

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for module_name in TEST_MODULES:
        try:
            module = __import__(module_name)
        except ImportError as e:
            print(f"ERROR: Could not import test module {module_name}: {e}")
            continue
        suite.addTests(loader.loadTestsFromModule(module))

    result = CustomTestRunner().run(suite)
    return result.wasSuccessful()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Test Runner for dircat. Runs unit tests by default or audits versions with a flag.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information for the test runner script.')
    parser.add_argument('--get_versions', action='store_true', help='Only perform the version audit across all files instead of running tests.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Test Runner")
        sys.exit(0)

    if args.get_versions:
        from version_util import get_all_file_versions
        get_all_file_versions(PROJECT_ROOT)
        sys.exit(0)

    sys.exit(0 if run_tests() else 1)
