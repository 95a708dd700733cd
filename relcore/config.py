"""
Configuration management for Relpack.
Loads and validates release.json project descriptions.
"""

import glob
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from relutils.defensive import ConfigurationError, InputValidator

from .archives import ARCHIVE_FORMATS
from .outputs import OUTPUT_KINDS
from .packages import resolve_package_specs
from .project import DEFAULT_PACKAGE_FOLDER, WIN32_MODES, Project

DEFAULT_CONFIG_FILE = 'release.json'


class Config:
    """Manages a project description and the tool settings around it."""

    # Default configuration values
    DEFAULT_CONFIG = {
        'files': [],
        'outputs': [],
        'archives': [],
        'links': {},
        'output_path': DEFAULT_PACKAGE_FOLDER,
        'win32_mode': 'console',
        'packages': [],
        'pyinstaller_options': [],
        'ignore_platform': False,
        'tools': {},
        'max_log_files': 5,
        'log_folder': 'logs'
    }

    STRING_FIELDS = {
        'name': "My Game",
        'version': "1.0.2",
        'executable': "bin/my_game",
        'readme': "README.md",
        'license': "COPYING.txt",
        'icon': "media/icon.ico",
        'output_path': "pkg",
        'underscored_name': "my_game",
        'underscored_version': "1_0_2",
        'wrapper': "wrappers/python-3.12-win32",
        'installer_group': "My Games",
        'log_folder': "logs",
    }

    LIST_FIELDS = {
        'files': ["bin/my_game", "lib/**/*.py"],
        'outputs': ["source", "win32_folder_from_wrapper"],
        'archives': ["zip", "7z"],
        'packages': ["colorama"],
        'pyinstaller_options': ["--hidden-import=colorama"],
    }

    def __init__(self, config_path: Path = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to release.json. If None, uses defaults.

        Raises:
            ConfigurationError: If the file is not valid
        """
        self.config = self.DEFAULT_CONFIG.copy()
        self.config_path = config_path

        if config_path is not None:
            self.load_config(Path(config_path))

    def load_config(self, config_path: Path):
        """Load configuration from JSON file."""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file\n"
                f"  Config file: {config_path.absolute()}\n"
                f"  Problem: {e.msg}\n"
                f"  Line: {e.lineno}, Column: {e.colno}") from e
        except OSError as e:
            raise ConfigurationError(
                f"Could not load config file\n"
                f"  Config file: {config_path.absolute()}\n"
                f"  Problem: {e}") from e

        self.update(user_config)
        logging.info(f"Loaded project description from {config_path}")

    def update(self, user_config: Dict[str, Any]):
        """Validate and apply settings; nothing is applied if any are invalid."""
        is_valid, errors = self._validate_config(user_config)
        if not is_valid:
            raise ConfigurationError("\n\n".join(errors))

        self.config.update(user_config)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self.config.get(key, default)

    def _validate_config(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate configuration dictionary.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if not isinstance(config, dict):
            return False, [f"ERROR: Config file must contain a JSON object, got {type(config).__name__}"]

        for field, example in self.STRING_FIELDS.items():
            if field in config and config[field] is not None and not isinstance(config[field], str):
                errors.append(
                    f"ERROR: Invalid config value\n"
                    f"  Field: {field}\n"
                    f"  Value: {repr(config[field])} ({type(config[field]).__name__})\n"
                    f"  Expected: string\n"
                    f"  Example: {example!r}"
                )

        for field, examples in self.LIST_FIELDS.items():
            if field in config:
                value = config[field]
                if not isinstance(value, list):
                    errors.append(
                        f"ERROR: Invalid config value\n"
                        f"  Field: {field}\n"
                        f"  Value: {repr(value)} ({type(value).__name__})\n"
                        f"  Expected: list of strings\n"
                        f"  Example: {examples}"
                    )
                elif not all(isinstance(item, str) for item in value):
                    errors.append(
                        f"ERROR: Invalid config value\n"
                        f"  Field: {field}\n"
                        f"  Problem: List contains non-string values\n"
                        f"  Expected: All entries must be strings\n"
                        f"  Example: {examples}"
                    )

        for field, catalog in (('outputs', OUTPUT_KINDS), ('archives', ARCHIVE_FORMATS)):
            value = config.get(field)
            if isinstance(value, list):
                unknown = [item for item in value if isinstance(item, str) and item not in catalog]
                if unknown:
                    errors.append(
                        f"ERROR: Invalid config value\n"
                        f"  Field: {field}\n"
                        f"  Problem: Unsupported {', '.join(unknown)}\n"
                        f"  Expected: Any of {', '.join(catalog)}"
                    )

        if 'win32_mode' in config and config['win32_mode'] not in WIN32_MODES:
            errors.append(
                f"ERROR: Invalid config value\n"
                f"  Field: win32_mode\n"
                f"  Value: {repr(config['win32_mode'])}\n"
                f"  Expected: 'console' or 'windows'"
            )

        for field in ('links', 'tools'):
            if field in config:
                value = config[field]
                if not isinstance(value, dict):
                    errors.append(f"{field} must be a dictionary")
                elif not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
                    errors.append(f"{field} must map strings to strings")

        if 'ignore_platform' in config and not isinstance(config['ignore_platform'], bool):
            errors.append(f"ignore_platform must be true or false, got {config['ignore_platform']!r}")

        if 'max_log_files' in config:
            value = config['max_log_files']
            if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= 100:
                errors.append(
                    f"ERROR: Invalid config value\n"
                    f"  Field: max_log_files\n"
                    f"  Value: {repr(value)}\n"
                    f"  Expected: number between 1 and 100\n"
                    f"  Example: 5"
                )

        return (len(errors) == 0, errors)

    def expand_files(self) -> List[str]:
        """File manifest with glob patterns expanded, in order and without duplicates."""
        files = []
        for entry in self.config['files']:
            if glob.has_magic(entry):
                matches = sorted(m for m in glob.glob(entry, recursive=True) if Path(m).is_file())
                if not matches:
                    logging.warning(f"File pattern matched nothing: {entry}")
            else:
                matches = [entry]
            for match in matches:
                match = Path(match).as_posix()
                InputValidator.validate_relative(match, 'files')
                if match not in files:
                    files.append(match)
        return files

    def to_project(self) -> Project:
        """Build the Project this configuration describes."""
        project = Project(self.config.get('name'), self.config.get('version'))
        project.files = self.expand_files()
        project.output_path = self.config['output_path']

        for attr in ('executable', 'readme', 'license', 'icon', 'underscored_name',
                     'underscored_version', 'wrapper', 'installer_group'):
            if self.config.get(attr) is not None:
                setattr(project, attr, self.config[attr])

        project.win32_mode = self.config['win32_mode']
        project.pyinstaller_options = list(self.config['pyinstaller_options'])
        project.ignore_platform = self.config['ignore_platform']
        project.tools = dict(self.config['tools'])

        for output in self.config['outputs']:
            project.add_output(output)
        for fmt in self.config['archives']:
            project.add_archive(fmt)
        for url, title in self.config['links'].items():
            project.add_link(url, title)

        if self.config['packages']:
            project.package_specs = resolve_package_specs(self.config['packages'])

        return project

    @property
    def max_log_files(self) -> int:
        """Get maximum number of log files to keep."""
        return self.config['max_log_files']

    @property
    def log_folder(self) -> str:
        """Get log folder path."""
        return self.config['log_folder']
