"""
Test suite for release.json loading and validation.

Verifies that config errors are clear, show examples, and that valid files
produce the expected Project.
"""

import json

import pytest
from pathlib import Path
from unittest.mock import patch

from relcore.config import Config
from relcore.packages import PackageSpec
from relutils.defensive import ConfigurationError


@pytest.fixture
def write_config(project_dir):
    def _write(data):
        path = project_dir / "release.json"
        path.write_text(json.dumps(data) if not isinstance(data, str) else data)
        return path
    return _write


class TestLoading:

    def test_valid_config_builds_project(self, write_config, wrapper_dir):
        path = write_config({
            "name": "Test App",
            "version": "0.1",
            "files": ["bin/test_app", "lib/**/*.py"],
            "readme": "README.txt",
            "license": "LICENSE.txt",
            "outputs": ["source", "win32_folder_from_wrapper"],
            "archives": ["zip", "zip", "7z"],
            "links": {"http://example.org": "Website"},
            "wrapper": str(wrapper_dir),
            "win32_mode": "windows",
            "tools": {"7z": "/opt/7z/7zz"},
        })
        project = Config(path).to_project()

        assert project.name == "Test App"
        assert project.underscored_version == "0_1"
        assert project.files == ["bin/test_app", "lib/test_app/__init__.py", "lib/test_app/main.py"]
        assert project.outputs == ["source", "win32_folder_from_wrapper"]
        assert project.archives == ["zip", "7z"]
        assert project.links == {"http://example.org": "Website"}
        assert project.wrapper == str(wrapper_dir)
        assert project.win32_mode == "windows"
        assert project.tools == {"7z": "/opt/7z/7zz"}
        assert project.executable == "bin/test_app"

    def test_defaults(self):
        config = Config()
        assert config.log_folder == "logs"
        assert config.max_log_files == 5
        assert config.get("output_path") == "pkg"

    def test_packages_are_resolved(self, write_config):
        spec = PackageSpec("colorama", "0.4.6", Path("x.dist-info"), ())
        path = write_config({"name": "Test App", "packages": ["colorama"]})
        with patch("relcore.config.resolve_package_specs", return_value=[spec]) as mock_resolve:
            project = Config(path).to_project()
        mock_resolve.assert_called_once_with(["colorama"])
        assert project.package_specs == [spec]

    def test_pattern_matching_nothing_is_dropped(self, write_config):
        path = write_config({"name": "Test App", "files": ["docs/*.md", "bin/test_app"]})
        assert Config(path).to_project().files == ["bin/test_app"]


class TestValidation:

    def test_invalid_json(self, write_config):
        path = write_config('{"name": "Test App",')
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            Config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Could not load config file"):
            Config(tmp_path / "nope.json")

    def test_wrong_type_shows_clear_error(self, write_config):
        path = write_config({"name": 42})
        with pytest.raises(ConfigurationError) as excinfo:
            Config(path)
        message = str(excinfo.value)
        assert "Field: name" in message
        assert "Value: 42 (int)" in message
        assert "Expected: string" in message

    def test_list_field_must_be_list(self, write_config):
        path = write_config({"files": "bin/test_app"})
        with pytest.raises(ConfigurationError, match="Expected: list of strings"):
            Config(path)

    def test_unknown_output(self, write_config):
        path = write_config({"outputs": ["source", "amiga"]})
        with pytest.raises(ConfigurationError, match="Unsupported amiga"):
            Config(path)

    def test_unknown_archive(self, write_config):
        path = write_config({"archives": ["rar"]})
        with pytest.raises(ConfigurationError, match="Unsupported rar"):
            Config(path)

    def test_bad_win32_mode(self, write_config):
        path = write_config({"win32_mode": "gui"})
        with pytest.raises(ConfigurationError, match="win32_mode"):
            Config(path)

    def test_links_must_be_mapping(self, write_config):
        path = write_config({"links": ["http://example.org"]})
        with pytest.raises(ConfigurationError, match="links must be a dictionary"):
            Config(path)

    def test_max_log_files_range(self, write_config):
        path = write_config({"max_log_files": 0})
        with pytest.raises(ConfigurationError, match="max_log_files"):
            Config(path)

    def test_all_errors_reported_together(self, write_config):
        path = write_config({"name": 1, "version": 2})
        with pytest.raises(ConfigurationError) as excinfo:
            Config(path)
        assert "Field: name" in str(excinfo.value)
        assert "Field: version" in str(excinfo.value)

    def test_absolute_file_rejected(self, write_config, project_dir):
        path = write_config({"name": "Test App", "files": [str(project_dir / "bin" / "test_app")]})
        with pytest.raises(ConfigurationError, match="relative to the project root"):
            Config(path).to_project()
