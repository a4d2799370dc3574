"""
Reader options loaded from an ovus.yaml file.

An options file lets a template directory describe how its templates are
discovered, instead of repeating it on every command line:

    path: "components/**/*.html"
    blacklist:
      - "**/drafts/**"
    whitelist: []
    htmlExtensions: [".html", ".htm"]
    moduleExtensions: [".py"]

Every key is optional, and each takes a single string or a list of them.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import OptionsError


OPTION_KEYS: Dict[str, str] = {
    'path': 'path',
    'blacklist': 'blacklist',
    'whitelist': 'whitelist',
    'htmlExtensions': 'html_extensions',
    'moduleExtensions': 'module_extensions',
}


class ReaderOptions:
    """
    Options for FileReader, read from a YAML file.

    Unknown keys are rejected so that a typo does not silently fall back
    to a default.
    """

    def __init__(self, options_path: Union[str, Path]):
        """
        Load reader options from a YAML file.

        Args:
            options_path: Path to the options file

        Raises:
            OptionsError: If the file is missing, not YAML, not a mapping,
                          uses unknown keys, or has a non-string value
        """
        self.options_path = Path(options_path)

        if not self.options_path.exists():
            raise OptionsError(f"Options file not found: {self.options_path}")

        self.config = self._config_load()

        unknown: List[str] = sorted(str(key) for key in set(self.config) - set(OPTION_KEYS))
        if unknown:
            raise OptionsError(
                f"Unknown option(s) in {self.options_path.name}: {', '.join(unknown)}"
            )

        for key, value in self.config.items():
            if not self.value_isValid(value):
                raise OptionsError(
                    f"Option '{key}' in {self.options_path.name} must be a string "
                    f"or a list of strings, got {value!r}"
                )

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the options file"""
        try:
            with open(self.options_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise OptionsError(f"Failed to parse {self.options_path.name}: {e}")
        except OSError as e:
            raise OptionsError(f"Failed to load {self.options_path.name}: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise OptionsError(f"{self.options_path.name} must contain a mapping")
        return config

    @staticmethod
    def value_isValid(value: Any) -> bool:
        """Option values are a glob or extension, or a list of them"""
        if isinstance(value, str):
            return True
        return isinstance(value, list) and all(isinstance(item, str) for item in value)

    def config_get(self, key: str, default: Any = None) -> Any:
        """Get an option value by its file key (e.g. 'htmlExtensions')"""
        return self.config.get(key, default)

    def readerKwargs_get(self) -> Dict[str, Any]:
        """
        Options present in the file, keyed by FileReader argument name.

        Example:
            {'path': 'components/*.html', 'html_extensions': ['.html']}
        """
        return {
            argument: self.config[key]
            for key, argument in OPTION_KEYS.items()
            if key in self.config
        }

    def __repr__(self) -> str:
        return f"ReaderOptions(path='{self.options_path}')"


def options_loadOptional(directory: Union[str, Path], filename: str) -> Optional[ReaderOptions]:
    """
    Load the options file from a directory if it exists.

    Returns:
        ReaderOptions, or None when the directory has no options file
    """
    options_path: Path = Path(directory) / filename
    if not options_path.is_file():
        return None
    return ReaderOptions(options_path)
