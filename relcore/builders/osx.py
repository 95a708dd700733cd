"""
macOS application bundle output.
"""

import os
import plistlib
import shutil
import stat
from pathlib import Path

from .base import FolderBuilder

LAUNCHER_TEMPLATE = """#!/bin/sh
APP_DIR="$(cd "$(dirname "$0")/../Resources/application" && pwd)"
cd "$APP_DIR"
exec /usr/bin/env python3 "$APP_DIR/{executable}" "$@"
"""


class OsxAppFolder(FolderBuilder):
    """Wraps the project in a <Name>.app bundle next to the readme and license."""

    @property
    def app_name(self) -> str:
        return f"{self.project.name}.app"

    def prerequisites(self):
        prerequisites = super().prerequisites()
        if self.project.icon:
            prerequisites.append(self.project.icon)
        return prerequisites

    def assemble(self, folder: Path):
        contents = folder / self.app_name / 'Contents'
        macos = contents / 'MacOS'
        resources = contents / 'Resources'
        application = resources / 'application'
        for directory in (macos, application):
            directory.mkdir(parents=True)

        self.copy_files_relative(self.project.files, application)

        launcher = macos / self.project.underscored_name
        launcher.write_text(LAUNCHER_TEMPLATE.format(executable=self.project.executable),
                            encoding='utf-8')
        os.chmod(launcher, os.stat(launcher).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

        info = {
            'CFBundleName': self.project.name,
            'CFBundleExecutable': self.project.underscored_name,
            'CFBundleIdentifier': f"org.relpack.{self.project.underscored_name}",
            'CFBundlePackageType': 'APPL',
            'CFBundleInfoDictionaryVersion': '6.0',
        }
        if self.project.version:
            info['CFBundleVersion'] = self.project.version
            info['CFBundleShortVersionString'] = self.project.version
        if self.project.icon:
            icon_name = Path(self.project.icon).name
            shutil.copy2(self.project.icon, resources / icon_name)
            info['CFBundleIconFile'] = icon_name

        with open(contents / 'Info.plist', 'wb') as f:
            plistlib.dump(info, f)

        self.copy_readme_and_license(folder)
