"""
Project description for Relpack.
Identity, file manifest and the outputs and archives to produce.
"""

import re
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional

from relutils.defensive import ConfigurationError

DEFAULT_PACKAGE_FOLDER = 'pkg'

WIN32_MODES = ('console', 'windows')


class Project:
    """A project to build and package for release."""

    def __init__(self, name: Optional[str] = None, version: Optional[str] = None):
        self.name = name
        self.version = version
        self.files: List[str] = []
        self.output_path = DEFAULT_PACKAGE_FOLDER
        self.readme: Optional[str] = None
        # Must be a text or rtf file; the installer asks the user to accept it.
        self.license: Optional[str] = None
        self.icon: Optional[str] = None

        # Output-kind specific settings, only checked when that kind is requested
        self.wrapper: Optional[str] = None
        self.win32_mode = 'console'
        self.package_specs = []
        self.installer_group: Optional[str] = None
        self.pyinstaller_options: List[str] = []
        self.ignore_platform = False
        # Command overrides for external tools, e.g. {'7z': 'C:/Tools/7z.exe'}
        self.tools: Dict[str, str] = {}

        self._underscored_name: Optional[str] = None
        self._underscored_version: Optional[str] = None
        self._executable: Optional[str] = None
        self._outputs: List[str] = []
        self._archives: List[str] = []
        self._links: Dict[str, str] = OrderedDict()

    @property
    def underscored_name(self) -> Optional[str]:
        """Name used for file names; derived from name unless set directly."""
        if self._underscored_name is not None or self.name is None:
            return self._underscored_name
        cleaned = re.sub(r'[^a-z0-9_\- ]', '', self.name.strip().lower())
        return '_'.join(part for part in re.split(r'[\-_ ]+', cleaned) if part)

    @underscored_name.setter
    def underscored_name(self, value: Optional[str]):
        self._underscored_name = value

    @property
    def underscored_version(self) -> Optional[str]:
        if self._underscored_version is not None or self.version is None:
            return self._underscored_version
        return self.version.replace('.', '_')

    @underscored_version.setter
    def underscored_version(self, value: Optional[str]):
        self._underscored_version = value

    @property
    def executable(self) -> Optional[str]:
        """Entry script; defaults to bin/<underscored_name>."""
        if self._executable is not None or self.underscored_name is None:
            return self._executable
        return f"bin/{self.underscored_name}"

    @executable.setter
    def executable(self, value: Optional[str]):
        self._executable = value

    @property
    def outputs(self) -> List[str]:
        return list(self._outputs)

    @property
    def archives(self) -> List[str]:
        return list(self._archives)

    @property
    def links(self) -> Dict[str, str]:
        return OrderedDict(self._links)

    def add_output(self, kind: str) -> str:
        """Add a type of output to produce. At least one is required."""
        from .outputs import get_output_kind
        get_output_kind(kind)
        if kind not in self._outputs:
            self._outputs.append(kind)
        return kind

    def add_archive(self, fmt: str) -> str:
        """Add an archive format every output is packaged in."""
        from .archives import get_archive_format
        get_archive_format(fmt)
        if fmt not in self._archives:
            self._archives.append(fmt)
        return fmt

    def add_link(self, url: str, title: str) -> str:
        """Add a link file to be included in the win32 releases."""
        self._links[url] = title
        return url

    @property
    def folder_base(self) -> Path:
        """Path every output folder name is built from."""
        if self.underscored_name is None:
            raise ConfigurationError("Project name must be set before output folders can be named")
        base = self.underscored_name
        if self.version:
            base += f"_{self.underscored_version}"
        return Path(self.output_path) / base

    def folder_for(self, kind: str) -> Path:
        """Output folder for an output kind."""
        from .outputs import get_output_kind
        suffix = get_output_kind(kind).suffix
        base = self.folder_base
        return base.parent / f"{base.name}_{suffix}"

    def __repr__(self):
        return f"Project({self.name!r}, {self.version!r})"
