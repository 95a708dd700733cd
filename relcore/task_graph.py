"""
Task graph compiler for Relpack.

Turns a project's requested outputs and archive formats into build and
package steps:

    build                   one step per family (source, osx, win32)
    build:win32             every requested win32 output
    build:<kind>            the output folder
    package                 one step per family
    package:win32           every requested win32 output
    package:<kind>          the output in every requested format
    package:<kind>:<fmt>    the archive <folder>.<ext>

Registration follows catalog order only.
"""

import logging
from typing import List, Optional

from relutils.defensive import ConfigurationError
from relutils.system_check import SystemCheck

from .archives import ARCHIVE_FORMATS, archive, archive_path
from .outputs import OUTPUT_KINDS
from .tasks import TaskGraph


def _requested_kinds(project):
    return [kind for name, kind in OUTPUT_KINDS.items() if name in project.outputs]


def _requested_formats(project):
    return [fmt for name, fmt in ARCHIVE_FORMATS.items() if name in project.archives]


def compile_tasks(project, graph: Optional[TaskGraph] = None) -> TaskGraph:
    """
    Generate every step the project needs.

    Args:
        project: Project to compile
        graph: Graph to register into (a new one by default)

    Returns:
        The task graph

    Raises:
        ConfigurationError: If no outputs are requested, a requested output
            cannot be produced, or a step is already registered in graph
    """
    if not project.outputs:
        raise ConfigurationError("Must specify at least one output with add_output before tasks can be generated")

    kinds = _requested_kinds(project)

    # Validate everything before touching the graph
    builders = [kind.builder(project) for kind in kinds]
    for builder in builders:
        builder.validate()

    graph = graph if graph is not None else TaskGraph()

    build_groups = []
    win32_builds = []
    for builder in builders:
        builder.register(graph)
        if builder.kind.is_win32:
            win32_builds.append(builder.task_name)
        else:
            build_groups.append(builder.task_name)

    if win32_builds:
        graph.task("build:win32", win32_builds, description="Build all win32 outputs")
        build_groups.append("build:win32")

    graph.task("build", build_groups, description="Build all outputs")

    generate_archive_tasks(project, graph, kinds)

    logging.info(f"Generated {len(graph)} tasks for {project.name}")
    return graph


def generate_archive_tasks(project, graph: TaskGraph, kinds) -> List[str]:
    """Register the package steps; returns the top-level package prerequisites."""
    system_check = SystemCheck({'tools': project.tools})
    formats = _requested_formats(project)

    win32_tasks = []
    top_level_tasks = []
    for kind in kinds:
        token = kind.task_token
        folder = project.folder_for(kind.name)
        kind_tasks = []

        for archive_format in formats:
            package = archive_path(folder, archive_format)
            graph.file(package, [str(folder)],
                       _archive_action(package, folder, archive_format, system_check))
            task_name = f"package:{token}:{archive_format.name}"
            graph.task(task_name, [str(package)], description=f"Create {package}")
            kind_tasks.append(task_name)

        graph.task(f"package:{token}", kind_tasks,
                   description=f"Package {kind.name} in all archive formats")

        if kind.is_win32:
            win32_tasks.append(f"package:{token}")
            if "package:win32" not in top_level_tasks:
                top_level_tasks.append("package:win32")
        else:
            top_level_tasks.append(f"package:{token}")

    if win32_tasks:
        graph.task("package:win32", win32_tasks, description="Package all win32 outputs")

    graph.task("package", top_level_tasks, description="Package all outputs")
    return top_level_tasks


def _archive_action(package, folder, archive_format, system_check):
    return lambda: archive(package, folder, archive_format, system_check)
