"""
Plain source tree output.
"""

from pathlib import Path

from .base import FolderBuilder


class SourceFolder(FolderBuilder):
    """Copies the project files as they are."""

    def assemble(self, folder: Path):
        self.copy_files_relative(self.project.files, folder)
        self.copy_readme_and_license(folder)
