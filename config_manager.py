# ==============================================================================
# File: config_manager.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial creation to manage dynamic settings loaded from .dircat.json.",
    "A missing or malformed config now raises ConfigNotFoundError / InvalidConfigError instead of silently using defaults.",
    "Added type validation for outputName and ignorePatterns.",
    "Added effective_ignore_patterns() so the config file and output file are always excluded from the bundle.",
    "Added invalid_patterns() to surface malformed globs to the CLI.",
    "Added write_config() used by 'dircat init'.",
    "BUG FIX: A config file that is not valid UTF-8 now raises InvalidConfigError instead of an uncaught UnicodeDecodeError.",
]
# ------------------------------------------------------------------------------
import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
import argparse
import sys

import config
from errors import ConfigNotFoundError, InvalidConfigError
from glob_match import PatternSet, escape


def default_settings(output_name: str = config.DEFAULT_OUTPUT) -> Dict[str, Any]:
    """The settings 'dircat init' writes when every prompt is left blank."""
    return {
        "outputName": output_name,
        "ignorePatterns": [config.CONFIG_NAME, output_name],
    }


class ConfigManager:
    """
    Loads and validates configuration from a JSON file.
    Provides structured access to the output file name and the ignore globs.
    """
    DEFAULT_CONFIG_FILE = Path(config.CONFIG_NAME)

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_FILE):
        self.config_path = Path(config_path)
        self._data: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Loads and parses the JSON configuration file."""
        if not self.config_path.exists():
            raise ConfigNotFoundError(f"Configuration file not found at {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidConfigError(f"Invalid JSON format in {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigNotFoundError(f"Cannot read {self.config_path}: {e}") from e

        self._validate(data)
        return data

    def _validate(self, data: Any):
        if not isinstance(data, dict):
            raise InvalidConfigError(f"{self.config_path} must contain a JSON object")

        output_name = data.get('outputName')
        if output_name is not None and not isinstance(output_name, str):
            raise InvalidConfigError(f"'outputName' in {self.config_path} must be a string")

        patterns = data.get('ignorePatterns')
        if patterns is not None:
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise InvalidConfigError(f"'ignorePatterns' in {self.config_path} must be a list of strings")

    @property
    def OUTPUT_NAME(self) -> str:
        """Returns the output file name, written inside the scanned root."""
        # Defaults when absent or blank
        return self._data.get('outputName') or config.DEFAULT_OUTPUT

    @property
    def IGNORE_PATTERNS(self) -> List[str]:
        """Returns the user-defined ignore globs in file order."""
        return list(self._data.get('ignorePatterns') or [])

    def effective_ignore_patterns(self) -> List[str]:
        """
        User globs plus the implicit exclusions: the config file and the output
        file, as literal root-relative names.
        """
        patterns: List[str] = []
        for pattern in self.IGNORE_PATTERNS + [escape(self.config_path.name), escape(self.OUTPUT_NAME)]:
            if pattern not in patterns:
                patterns.append(pattern)
        return patterns

    def invalid_patterns(self) -> List[str]:
        return PatternSet(self.IGNORE_PATTERNS).invalid

    @staticmethod
    def write_config(config_path: Union[str, Path], output_name: str = config.DEFAULT_OUTPUT,
                     ignore_patterns: Optional[List[str]] = None) -> Path:
        """Writes a config file with 2-space indentation and returns its path."""
        data = default_settings(output_name)
        if ignore_patterns is not None:
            data['ignorePatterns'] = list(ignore_patterns)
        path = Path(config_path)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=config.JSON_INDENT)
            f.write("\n")
        return path


if __name__ == "__main__":

    parser = argparse.ArgumentParser(description="Config Manager for dircat: Loads and validates settings from .dircat.json.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Configuration Manager")
        sys.exit(0)
    else:
        # Example usage of the ConfigManager when run independently
        try:
            manager = ConfigManager()
        except (ConfigNotFoundError, InvalidConfigError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        print(f"Loaded config from: {manager.config_path.resolve()}")
        print(f"Output Name: {manager.OUTPUT_NAME}")
        print(f"Ignore Patterns: {manager.effective_ignore_patterns()}")
        for bad in manager.invalid_patterns():
            print(f"⚠️  Malformed pattern (never matches): {bad}")
