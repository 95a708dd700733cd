"""
Tests for the task graph compiler: which steps exist and what they depend on.
"""

import pytest

from relcore.project import Project
from relcore.task_graph import compile_tasks
from relcore.tasks import TaskGraph
from relutils.defensive import ConfigurationError


@pytest.fixture
def project(new_project, wrapper_dir):
    new_project.ignore_platform = True
    new_project.wrapper = str(wrapper_dir)
    new_project.installer_group = "Test Apps"
    return new_project


def prerequisites(graph, name):
    return graph[name].prerequisites


class TestNoOutputs:

    def test_empty_outputs_raise(self, project):
        graph = TaskGraph()
        with pytest.raises(ConfigurationError, match="at least one output"):
            compile_tasks(project, graph)
        assert len(graph) == 0

    def test_missing_name_raises(self, project_dir):
        project = Project()
        project.add_output("source")
        with pytest.raises(ConfigurationError):
            compile_tasks(project)

    def test_name_without_letters_or_digits_raises(self, project_dir):
        project = Project("!!!", "0.1")
        project.add_output("source")
        graph = TaskGraph()
        with pytest.raises(ConfigurationError, match="no letters or digits"):
            compile_tasks(project, graph)
        assert "pkg/_0_1_SOURCE" not in graph

    def test_explicit_underscored_name_accepted(self, project_dir):
        project = Project("!!!", "0.1")
        project.underscored_name = "bang"
        project.add_output("source")
        assert "pkg/bang_0_1_SOURCE" in compile_tasks(project)


class TestBuildSteps:

    def test_source_only(self, project):
        project.add_output("source")
        graph = compile_tasks(project)

        assert prerequisites(graph, "build:source") == ["pkg/test_app_0_1_SOURCE"]
        assert prerequisites(graph, "build") == ["build:source"]
        assert "build:win32" not in graph
        assert prerequisites(graph, "pkg/test_app_0_1_SOURCE") == project.files

    def test_one_build_step_per_kind(self, project):
        for kind in ("win32_standalone", "source", "osx_app", "win32_folder"):
            project.add_output(kind)
        graph = compile_tasks(project)

        build_steps = [n for n in graph.names() if n.startswith("build:") and n != "build:win32"]
        assert build_steps == ["build:source", "build:osx:app", "build:win32:folder", "build:win32:standalone"]

    def test_build_aggregate_has_one_step_per_family(self, project):
        for kind in ("source", "osx_app", "win32_folder", "win32_installer", "win32_standalone"):
            project.add_output(kind)
        graph = compile_tasks(project)

        assert prerequisites(graph, "build") == ["build:source", "build:osx:app", "build:win32"]
        assert prerequisites(graph, "build:win32") == [
            "build:win32:folder", "build:win32:installer", "build:win32:standalone"]

    def test_wrapper_build_step(self, project, wrapper_dir):
        project.add_output("win32_folder_from_wrapper")
        graph = compile_tasks(project)

        folder = "pkg/test_app_0_1_WIN32_FROM_WRAPPER"
        assert prerequisites(graph, "build:win32:folder_from_wrapper") == [folder]
        assert prerequisites(graph, folder) == project.files + [str(wrapper_dir)]
        assert prerequisites(graph, "build:win32") == ["build:win32:folder_from_wrapper"]

    def test_validation_happens_before_registration(self, project):
        project.add_output("source")
        project.add_output("win32_folder_from_wrapper")
        project.wrapper = None
        graph = TaskGraph()
        with pytest.raises(ConfigurationError, match="wrapper not set"):
            compile_tasks(project, graph)
        assert len(graph) == 0

    def test_compiling_twice_into_one_graph_fails(self, project):
        project.add_output("source")
        graph = compile_tasks(project)
        with pytest.raises(ConfigurationError, match="already defined"):
            compile_tasks(project, graph)

    def test_platform_check(self, project, monkeypatch):
        project.ignore_platform = False
        project.add_output("win32_folder")
        monkeypatch.setattr("relcore.builders.win32.platform.system", lambda: "Linux")
        with pytest.raises(ConfigurationError, match="cannot be built on Linux"):
            compile_tasks(project)


class TestPackageSteps:

    def test_archive_naming(self, project):
        project.add_output("source")
        project.add_archive("zip")
        graph = compile_tasks(project)

        assert prerequisites(graph, "package:source:zip") == ["pkg/test_app_0_1_SOURCE.zip"]
        assert prerequisites(graph, "pkg/test_app_0_1_SOURCE.zip") == ["pkg/test_app_0_1_SOURCE"]
        assert prerequisites(graph, "package:source") == ["package:source:zip"]
        assert prerequisites(graph, "package") == ["package:source"]

    def test_package_step_per_kind_and_format(self, project):
        project.add_output("win32_folder_from_wrapper")
        project.add_output("source")
        project.add_archive("tar_bz2")
        project.add_archive("7z")
        graph = compile_tasks(project)

        package_steps = [n for n in graph.names()
                         if n.startswith("package:") and n.rsplit(":", 1)[-1] in ("7z", "tar_bz2")]
        assert package_steps == [
            "package:source:7z",
            "package:source:tar_bz2",
            "package:win32:folder_from_wrapper:7z",
            "package:win32:folder_from_wrapper:tar_bz2",
        ]
        assert prerequisites(graph, "package:source:tar_bz2") == ["pkg/test_app_0_1_SOURCE.tar.bz2"]
        assert prerequisites(graph, "package:source") == ["package:source:7z", "package:source:tar_bz2"]

    def test_no_package_steps_without_formats(self, project):
        project.add_output("source")
        graph = compile_tasks(project)

        assert not [n for n in graph.names() if n.startswith("package:source:")]
        assert prerequisites(graph, "package:source") == []

    def test_package_aggregates_group_win32(self, project):
        for kind in ("source", "osx_app", "win32_folder", "win32_standalone"):
            project.add_output(kind)
        project.add_archive("zip")
        graph = compile_tasks(project)

        assert prerequisites(graph, "package") == ["package:source", "package:osx:app", "package:win32"]
        assert prerequisites(graph, "package:win32") == ["package:win32:folder", "package:win32:standalone"]
        assert prerequisites(graph, "package:win32:folder:zip") == ["pkg/test_app_0_1_WIN32.zip"]

    def test_no_win32_package_aggregate_without_win32(self, project):
        project.add_output("osx_app")
        graph = compile_tasks(project)
        assert "package:win32" not in graph
        assert prerequisites(graph, "package") == ["package:osx:app"]

    def test_steps_have_descriptions(self, project):
        project.add_output("source")
        project.add_archive("zip")
        described = dict(compile_tasks(project).described())
        assert described["package:source:zip"] == "Create pkg/test_app_0_1_SOURCE.zip"
        assert described["build"] == "Build all outputs"
