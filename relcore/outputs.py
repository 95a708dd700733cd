"""
Output kinds for Relpack.
Each kind has a folder suffix, a family used for aggregate steps and a builder.
"""

from collections import OrderedDict

from relutils.defensive import ConfigurationError

from .builders import (
    OsxAppFolder,
    SourceFolder,
    Win32Folder,
    Win32FolderFromWrapper,
    Win32Installer,
    Win32Standalone,
)


class OutputKind:
    """A target platform or packaging layout."""

    def __init__(self, name: str, suffix: str, builder_class):
        self.name = name
        self.suffix = suffix
        self.builder_class = builder_class

    @property
    def family(self) -> str:
        """Group used for the build/package aggregates: source, osx or win32."""
        return self.name.split('_', 1)[0]

    @property
    def is_win32(self) -> bool:
        return self.name.startswith('win32')

    @property
    def task_token(self) -> str:
        """Step name fragment, e.g. win32_folder -> win32:folder."""
        return self.name.replace('_', ':', 1)

    def builder(self, project):
        return self.builder_class(project, self)

    def __repr__(self):
        return f"OutputKind({self.name!r})"


# Catalog order decides the order build and package steps are registered in.
OUTPUT_KINDS = OrderedDict((kind.name, kind) for kind in [
    OutputKind('source', 'SOURCE', SourceFolder),
    OutputKind('osx_app', 'OSX', OsxAppFolder),
    OutputKind('win32_folder', 'WIN32', Win32Folder),
    OutputKind('win32_installer', 'WIN32_INSTALLER', Win32Installer),
    OutputKind('win32_standalone', 'WIN32_EXE', Win32Standalone),
    OutputKind('win32_folder_from_wrapper', Win32FolderFromWrapper.folder_suffix,
               Win32FolderFromWrapper),
])


def get_output_kind(name: str) -> OutputKind:
    """Look up an output kind by name, raising ConfigurationError if unknown."""
    try:
        return OUTPUT_KINDS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported output type {name!r} "
            f"(expected one of: {', '.join(OUTPUT_KINDS)})") from None
