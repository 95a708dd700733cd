"""
Windows folder built from a prebuilt interpreter wrapper.

The wrapper is a folder holding a redistributable Python runtime and two
host stubs (console.exe and windows.exe) that start bin/python.exe on the
loader script. Copying it and adding the program works on any host, so this
output is the way to produce Windows releases from Linux or macOS.
"""

import json
import logging
import platform
import shutil
from pathlib import Path
from typing import List

from relutils.defensive import ConfigurationError

from ..project import WIN32_MODES
from .base import FolderBuilder

CONSOLE_STUB = 'console.exe'
WINDOWS_STUB = 'windows.exe'
INTERPRETER_BIN = 'bin'
WINDOWED_INTERPRETER = 'pythonw.exe'
SOURCE_FOLDER = 'src'
PACKAGE_HOME = 'pkghome'
RUNNER_SCRIPT = 'relpack_runner.py'
RUNNER_SETTINGS = 'relpack_runner.json'

RUNNER_TEMPLATE = Path(__file__).parent / 'data' / RUNNER_SCRIPT


class Win32FolderFromWrapper(FolderBuilder):
    """
    Assembles a self-contained Windows folder around a wrapper runtime.

    Layout produced:
        <name>.exe                 the selected host stub
        bin/python.exe ...         the wrapper's interpreter
        src/...                    the project files
        pkghome/specifications/    package metadata
        pkghome/packages/          installed package files
        relpack_runner.py          loader started by the host stub
    """

    folder_suffix = 'WIN32_FROM_WRAPPER'

    @property
    def wrapper(self):
        return self.project.wrapper

    def valid_for_platform(self) -> bool:
        # Windows hosts build their outputs with the native builders.
        return platform.system() != 'Windows'

    def validate(self):
        super().validate()

        if not self.wrapper:
            raise ConfigurationError("wrapper not set")

        wrapper = Path(self.wrapper)
        if not (wrapper.is_dir() and (wrapper / CONSOLE_STUB).is_file()
                and (wrapper / WINDOWS_STUB).is_file()):
            raise ConfigurationError(
                f"wrapper not valid: {wrapper} must be a folder containing "
                f"{CONSOLE_STUB} and {WINDOWS_STUB}")

        if self.project.win32_mode not in WIN32_MODES:
            raise ConfigurationError(
                f"win32_mode must be one of {', '.join(WIN32_MODES)}, got {self.project.win32_mode!r}")

        for spec in self.project.package_specs:
            if spec.spec_path is None or not Path(spec.spec_path).exists():
                raise ConfigurationError(f"Specification for package {spec.name} not found: {spec.spec_path}")

    def prerequisites(self) -> List[str]:
        return super().prerequisites() + [str(self.wrapper)]

    def assemble(self, folder: Path):
        shutil.copytree(self.wrapper, folder, dirs_exist_ok=True)

        self.copy_files_relative(self.project.files, folder / SOURCE_FOLDER)
        self.install_host_binary(folder)
        self.remove_windowed_interpreter(folder)
        self.install_runner(folder)
        self.copy_packages(folder)

        if self.project.icon:
            shutil.copy2(self.project.icon, folder)

        self.copy_readme_and_license(folder)
        self.write_links(folder)

    def install_host_binary(self, folder: Path):
        stub = CONSOLE_STUB if self.project.win32_mode == 'console' else WINDOWS_STUB
        shutil.copy2(folder / stub, folder / f"{self.project.underscored_name}.exe")
        for name in (CONSOLE_STUB, WINDOWS_STUB):
            (folder / name).unlink()

    def remove_windowed_interpreter(self, folder: Path):
        windowed = folder / INTERPRETER_BIN / WINDOWED_INTERPRETER
        if windowed.exists():
            windowed.unlink()

    def install_runner(self, folder: Path):
        shutil.copyfile(RUNNER_TEMPLATE, folder / RUNNER_SCRIPT)
        settings = {
            'executable': Path(SOURCE_FOLDER, self.project.executable).as_posix(),
            'package_home': PACKAGE_HOME,
        }
        with open(folder / RUNNER_SETTINGS, 'w') as f:
            json.dump(settings, f, indent=4)

    def copy_packages(self, folder: Path):
        """Mirror each runtime package into the bundled package home."""
        specifications = folder / PACKAGE_HOME / 'specifications'
        packages = folder / PACKAGE_HOME / 'packages'
        specifications.mkdir(parents=True, exist_ok=True)
        packages.mkdir(parents=True, exist_ok=True)

        for spec in self.project.package_specs:
            logging.info(f"Bundling package {spec.name} {spec.version}")
            _copy_entry(Path(spec.spec_path), specifications)
            for install_path in spec.install_paths:
                _copy_entry(Path(install_path), packages)


def _copy_entry(source: Path, destination_dir: Path):
    target = destination_dir / source.name
    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)
    else:
        shutil.copy2(source, target)
