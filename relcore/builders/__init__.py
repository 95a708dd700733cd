"""
Folder assembly strategies, one per output kind.
"""

from .base import FolderBuilder
from .osx import OsxAppFolder
from .source import SourceFolder
from .win32 import Win32Folder, Win32Installer, Win32Standalone
from .win32_wrapper import Win32FolderFromWrapper

__all__ = [
    'FolderBuilder',
    'OsxAppFolder',
    'SourceFolder',
    'Win32Folder',
    'Win32Installer',
    'Win32Standalone',
    'Win32FolderFromWrapper'
]
