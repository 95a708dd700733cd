"""
Windows outputs built with PyInstaller.

PyInstaller does not cross-compile, so these outputs need a Windows host.
"""

import logging
import platform
import shutil
import tempfile
from pathlib import Path
from typing import List

from relutils.defensive import ConfigurationError
from relutils.safety import SubprocessSafety

from ..project import WIN32_MODES
from .base import FolderBuilder


class PyInstallerFolder(FolderBuilder):
    """Base for outputs that wrap the executable with PyInstaller."""

    onefile = False

    def valid_for_platform(self) -> bool:
        return platform.system() == 'Windows'

    def validate(self):
        super().validate()
        if self.project.win32_mode not in WIN32_MODES:
            raise ConfigurationError(
                f"win32_mode must be one of {', '.join(WIN32_MODES)}, got {self.project.win32_mode!r}")
        if not self.project.executable:
            raise ConfigurationError("executable not set")

    def prerequisites(self) -> List[str]:
        prerequisites = super().prerequisites()
        if self.project.icon:
            prerequisites.append(self.project.icon)
        return prerequisites

    def pyinstaller_command(self, work_dir: Path) -> List[str]:
        cmd = self.system_check.get_tool_command('pyinstaller') + [
            '--noconfirm',
            '--clean',
            '--name', self.project.underscored_name,
            '--distpath', str(work_dir / 'dist'),
            '--workpath', str(work_dir / 'build'),
            '--specpath', str(work_dir),
            '--onefile' if self.onefile else '--onedir',
        ]
        if self.project.win32_mode == 'windows':
            cmd.append('--windowed')
        if self.project.icon:
            cmd += ['--icon', str(Path(self.project.icon).resolve())]
        cmd += list(self.project.pyinstaller_options)
        cmd.append(str(Path(self.project.executable).resolve()))
        return cmd

    def run_pyinstaller(self, work_dir: Path) -> Path:
        """Wrap the executable; returns PyInstaller's dist folder."""
        SubprocessSafety.run_checked(self.pyinstaller_command(work_dir),
                                     operation=f"PyInstaller ({self.kind.name})")
        return work_dir / 'dist'

    def assemble(self, folder: Path):
        with tempfile.TemporaryDirectory(prefix='relpack-') as temp:
            dist = self.run_pyinstaller(Path(temp))
            self.collect(dist, folder, Path(temp))

        self.copy_readme_and_license(folder)
        self.write_links(folder)

    def collect(self, dist: Path, folder: Path, work_dir: Path):
        raise NotImplementedError


class Win32Folder(PyInstallerFolder):
    """Executable plus its libraries in one folder."""

    def collect(self, dist: Path, folder: Path, work_dir: Path):
        shutil.copytree(dist / self.project.underscored_name, folder, dirs_exist_ok=True)


class Win32Standalone(PyInstallerFolder):
    """A single self-extracting executable."""

    onefile = True

    def collect(self, dist: Path, folder: Path, work_dir: Path):
        exe = f"{self.project.underscored_name}.exe"
        shutil.copy2(dist / exe, folder / exe)


class Win32Installer(PyInstallerFolder):
    """A setup program generated with Inno Setup from the PyInstaller folder."""

    def validate(self):
        super().validate()
        if not self.project.installer_group:
            raise ConfigurationError("installer_group not set")

    def prerequisites(self) -> List[str]:
        prerequisites = super().prerequisites()
        prerequisites += [p for p in (self.project.readme, self.project.license) if p]
        return prerequisites

    def inno_script(self, source: Path, folder: Path) -> str:
        project = self.project
        exe = f"{project.underscored_name}.exe"
        lines = [
            "[Setup]",
            f"AppName={project.name}",
            f"AppVersion={project.version or '0'}",
            f"DefaultDirName={{autopf}}\\{project.name}",
            f"DefaultGroupName={project.installer_group}",
            f"OutputDir={folder.resolve()}",
            f"OutputBaseFilename={project.underscored_name}_setup",
            "Compression=lzma",
            "SolidCompression=yes",
        ]
        if project.license:
            lines.append(f"LicenseFile={Path(project.license).resolve()}")
        if project.icon:
            lines.append(f"SetupIconFile={Path(project.icon).resolve()}")

        lines += [
            "",
            "[Files]",
            f'Source: "{source.resolve()}\\*"; DestDir: "{{app}}"; Flags: recursesubdirs createallsubdirs',
        ]
        if project.readme:
            lines.append(f'Source: "{Path(project.readme).resolve()}"; DestDir: "{{app}}"; DestName: "README.txt"')

        lines += [
            "",
            "[Icons]",
            f'Name: "{{group}}\\{project.name}"; Filename: "{{app}}\\{exe}"',
        ]
        for url, title in project.links.items():
            lines.append(f'Name: "{{group}}\\{title}"; Filename: "{url}"')
        lines.append(f'Name: "{{group}}\\Uninstall {project.name}"; Filename: "{{uninstallexe}}"')

        return "\n".join(lines) + "\n"

    def collect(self, dist: Path, folder: Path, work_dir: Path):
        script = work_dir / f"{self.project.underscored_name}.iss"
        script.write_text(self.inno_script(dist / self.project.underscored_name, folder),
                          encoding='utf-8')
        logging.info(f"Compiling installer script {script.name}")
        SubprocessSafety.run_checked(self.system_check.get_tool_command('iscc') + [str(script)],
                                     operation="Inno Setup compile")
