"""
Tests for the Project description: derived names, outputs, archives, folders.
"""

import pytest
from pathlib import Path

from relcore.project import Project
from relutils.defensive import ConfigurationError


class TestUnderscoredNames:
    """Names used to build file names."""

    def test_underscored_name_is_derived_from_name(self):
        project = Project("  My Great-Game__Deluxe! ")
        assert project.underscored_name == "my_great_game_deluxe"

    def test_underscored_name_drops_punctuation(self):
        assert Project("Test App").underscored_name == "test_app"
        assert Project("R2-D2's Quest").underscored_name == "r2_d2s_quest"

    def test_underscored_name_can_be_set(self):
        project = Project("Test App")
        project.underscored_name = "custom"
        assert project.underscored_name == "custom"

    def test_underscored_name_without_name_is_none(self):
        assert Project().underscored_name is None

    def test_underscored_version(self):
        project = Project("Test App", "1.2.3")
        assert project.underscored_version == "1_2_3"
        project.underscored_version = "v1"
        assert project.underscored_version == "v1"

    def test_underscored_version_without_version_is_none(self):
        assert Project("Test App").underscored_version is None


class TestExecutable:

    def test_defaults_to_bin_underscored_name(self):
        assert Project("Test App").executable == "bin/test_app"

    def test_none_without_name(self):
        assert Project().executable is None

    def test_can_be_set(self):
        project = Project("Test App")
        project.executable = "main.py"
        assert project.executable == "main.py"


class TestOutputsAndArchives:

    def test_add_output_ignores_duplicates(self):
        project = Project("Test App")
        assert project.add_output("source") == "source"
        project.add_output("source")
        project.add_output("osx_app")
        assert project.outputs == ["source", "osx_app"]

    def test_add_output_rejects_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="Unsupported output type"):
            Project("Test App").add_output("amiga_disk")

    def test_add_archive_ignores_duplicates(self):
        project = Project("Test App")
        project.add_archive("zip")
        project.add_archive("zip")
        project.add_archive("7z")
        assert project.archives == ["zip", "7z"]

    def test_add_archive_rejects_unknown_format(self):
        with pytest.raises(ConfigurationError, match="Unsupported archive format"):
            Project("Test App").add_archive("rar")

    def test_add_link(self):
        project = Project("Test App")
        assert project.add_link("http://example.org", "Website") == "http://example.org"
        assert project.links == {"http://example.org": "Website"}

    def test_outputs_list_is_a_copy(self):
        project = Project("Test App")
        project.outputs.append("source")
        assert project.outputs == []


class TestFolders:

    def test_folder_with_version(self):
        project = Project("Test App", "0.1")
        assert project.folder_for("source") == Path("pkg/test_app_0_1_SOURCE")
        assert project.folder_for("win32_folder_from_wrapper") == Path("pkg/test_app_0_1_WIN32_FROM_WRAPPER")

    def test_folder_without_version(self):
        project = Project("Test App")
        assert project.folder_for("osx_app") == Path("pkg/test_app_OSX")

    def test_folder_honours_output_path(self):
        project = Project("Test App", "2.0")
        project.output_path = "release"
        assert project.folder_for("win32_standalone") == Path("release/test_app_2_0_WIN32_EXE")

    def test_folder_requires_name(self):
        with pytest.raises(ConfigurationError):
            Project().folder_base
