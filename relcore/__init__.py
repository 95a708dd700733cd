"""
Relpack Core Module
Project descriptions, output folder assembly and the build/package task graph.
"""

from .config import Config
from .project import Project
from .task_graph import compile_tasks
from .tasks import TaskGraph
from .logger import setup_logging

__all__ = [
    'Config',
    'Project',
    'compile_tasks',
    'TaskGraph',
    'setup_logging'
]
