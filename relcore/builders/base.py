"""
Shared folder assembly for every output kind.
"""

import logging
import platform
import shutil
from pathlib import Path
from typing import Iterable, List

from relutils.defensive import ConfigurationError, StateValidator
from relutils.system_check import SystemCheck


class FolderBuilder:
    """
    Populates an output folder for one output kind.

    Subclasses implement assemble(); everything before it (validation,
    step registration, removing a stale folder) is shared.
    """

    def __init__(self, project, kind):
        self.project = project
        self.kind = kind

    @property
    def folder(self) -> Path:
        return self.project.folder_for(self.kind.name)

    @property
    def task_name(self) -> str:
        return f"build:{self.kind.task_token}"

    @property
    def system_check(self) -> SystemCheck:
        return SystemCheck({'tools': self.project.tools})

    def valid_for_platform(self) -> bool:
        """Whether this host can produce the output."""
        return True

    def validate(self):
        """Check the project can produce this output. Runs before any file I/O."""
        if not self.project.name:
            raise ConfigurationError("Project name must be set before tasks can be generated")

        # Output folders and executables are named after it
        if not self.project.underscored_name:
            raise ConfigurationError(
                f"Project name {self.project.name!r} has no letters or digits to name "
                f"output files with; set underscored_name explicitly")

        if not self.project.ignore_platform and not self.valid_for_platform():
            raise ConfigurationError(
                f"{self.kind.name} output cannot be built on {platform.system()}")

    def prerequisites(self) -> List[str]:
        """Inputs the folder is rebuilt from when any of them changes."""
        return list(self.project.files)

    def register(self, graph):
        """Add the folder step and the build step to a task graph."""
        folder = str(self.folder)
        graph.file(folder, self.prerequisites(), self.build_folder)
        graph.task(self.task_name, [folder], description=f"Build {self.kind.name} output")

    def build_folder(self):
        folder = self.folder
        logging.info(f"Building {folder}")

        if folder.exists():
            shutil.rmtree(folder)

        required_mb = StateValidator.estimate_size_mb(self.prerequisites())
        StateValidator.check_disk_space(folder.parent, required_mb=required_mb)

        folder.mkdir(parents=True)
        self.assemble(folder)

    def assemble(self, folder: Path):
        raise NotImplementedError

    # Helpers shared by the strategies

    def copy_files_relative(self, files: Iterable[str], folder: Path):
        """Copy files into a folder, keeping their paths relative to the project root."""
        for file in files:
            destination = Path(folder) / Path(file).parent
            if not destination.exists():
                destination.mkdir(parents=True)
            shutil.copy2(file, destination)

    def copy_readme_and_license(self, folder: Path):
        if self.project.readme:
            shutil.copy2(self.project.readme, Path(folder) / 'README.txt')
        if self.project.license:
            shutil.copy2(self.project.license, Path(folder) / 'LICENSE.txt')

    def write_links(self, folder: Path):
        """Write an internet shortcut file per project link."""
        for url, title in self.project.links.items():
            shortcut = Path(folder) / f"{title}.url"
            shortcut.write_text(f"[InternetShortcut]\nURL={url}\n", encoding='utf-8')
