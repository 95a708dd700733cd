"""
Archive formats for Relpack.
Maps each format to the external compressor command that produces it.
"""

import logging
import os
from collections import OrderedDict
from pathlib import Path
from typing import List, Optional

from relutils.defensive import ConfigurationError
from relutils.safety import SubprocessSafety
from relutils.system_check import SystemCheck


class ArchiveFormat:
    """An archive format and the compressor invocation that creates it."""

    def __init__(self, name: str, extension: str, tool: str, arguments: List[str]):
        self.name = name
        self.extension = extension
        self.tool = tool
        self.arguments = arguments

    def command(self, system_check: Optional[SystemCheck] = None) -> List[str]:
        """Full command prefix; archive and folder names are appended."""
        system_check = system_check or SystemCheck()
        return system_check.get_tool_command(self.tool) + self.arguments

    def __repr__(self):
        return f"ArchiveFormat({self.name!r})"


# Catalog order decides the order package steps are registered in.
ARCHIVE_FORMATS = OrderedDict((fmt.name, fmt) for fmt in [
    # -mmt: multithreaded compression
    ArchiveFormat('7z', '7z', '7z', ['a', '-mmt', '-t7z']),
    ArchiveFormat('zip', 'zip', '7z', ['a', '-mmt', '-tzip']),
    ArchiveFormat('tar_bz2', 'tar.bz2', 'tar', ['-jcvf']),
])


def get_archive_format(name: str) -> ArchiveFormat:
    """Look up a format by name, raising ConfigurationError if unknown."""
    try:
        return ARCHIVE_FORMATS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported archive format {name!r} "
            f"(expected one of: {', '.join(ARCHIVE_FORMATS)})") from None


def archive_path(folder: Path, archive_format: ArchiveFormat) -> Path:
    """Path of the archive produced from a build folder."""
    folder = Path(folder)
    return folder.parent / f"{folder.name}.{archive_format.extension}"


def archive(package: Path, folder: Path, archive_format: ArchiveFormat,
            system_check: Optional[SystemCheck] = None) -> Path:
    """
    Compress a build folder into an archive.

    The compressor runs from the folder's parent directory so the archive
    holds relative paths.

    Args:
        package: Archive file to create
        folder: Built output folder
        archive_format: Format to compress with
        system_check: Tool lookup (for configured tool overrides)

    Returns:
        Path to the archive

    Raises:
        ExternalToolError: If the compressor exits with a non-zero status
    """
    package = Path(package)
    folder = Path(folder)

    logging.info(f"Compressing {package}")
    if package.exists():
        os.remove(package)

    cmd = archive_format.command(system_check) + [package.name, folder.name]
    SubprocessSafety.run_checked(cmd, cwd=folder.parent,
                                 operation=f"Compressing {package.name}")

    return package
