"""
Task graph for Relpack.

Named steps with prerequisites. File steps run only when their path is
missing or older than one of their prerequisites; plain steps always run.
The graph is an ordinary object owned by whoever built it.
"""

import logging
import os
import time
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from relutils.defensive import ConfigurationError


class Task:
    """A named step that always runs its action when invoked."""

    def __init__(self, name: str, prerequisites: Iterable = (),
                 action: Optional[Callable] = None, description: Optional[str] = None):
        self.name = str(name)
        self.prerequisites = [str(p) for p in prerequisites]
        self.action = action
        self.description = description

    def needed(self, graph: 'TaskGraph') -> bool:
        return True

    def timestamp(self) -> float:
        # A plain step is always considered fresh.
        return time.time()

    def execute(self):
        if self.action is not None:
            self.action()

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, {self.prerequisites!r})"


class FileTask(Task):
    """A step producing a file or folder at the path it is named after."""

    @property
    def path(self) -> Path:
        return Path(self.name)

    def needed(self, graph: 'TaskGraph') -> bool:
        if not self.path.exists():
            return True
        own = self.timestamp()
        return any(graph.timestamp_of(p) > own for p in self.prerequisites)

    def timestamp(self) -> float:
        if self.path.exists():
            return os.path.getmtime(self.path)
        return 0.0


class TaskGraph:
    """Registry of named steps and their invocation."""

    def __init__(self):
        self._tasks = OrderedDict()

    def _add(self, task: Task) -> Task:
        if task.name in self._tasks:
            raise ConfigurationError(f"Task already defined: {task.name}")
        self._tasks[task.name] = task
        return task

    def task(self, name: str, prerequisites: Iterable = (), action: Optional[Callable] = None,
             description: Optional[str] = None) -> Task:
        """Register a plain step."""
        return self._add(Task(name, prerequisites, action, description))

    def file(self, path, prerequisites: Iterable = (), action: Optional[Callable] = None,
             description: Optional[str] = None) -> FileTask:
        """Register a step that produces the given path."""
        return self._add(FileTask(str(path), prerequisites, action, description))

    def __getitem__(self, name) -> Task:
        return self._tasks[str(name)]

    def __contains__(self, name) -> bool:
        return str(name) in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def names(self) -> List[str]:
        """Step names in registration order."""
        return list(self._tasks)

    def described(self) -> List[Tuple[str, str]]:
        """(name, description) for every step that has a description."""
        return [(t.name, t.description) for t in self._tasks.values() if t.description]

    def timestamp_of(self, name: str) -> float:
        if name in self._tasks:
            return self._tasks[name].timestamp()
        return os.path.getmtime(name)

    def invoke(self, name: str) -> List[str]:
        """
        Run a step after its prerequisites.

        Args:
            name: Registered step name

        Returns:
            Names of the steps whose actions ran, in order

        Raises:
            KeyError: If the step is not registered
            FileNotFoundError: If a prerequisite is neither a step nor an existing path
            ConfigurationError: If the prerequisites form a cycle
        """
        executed = []
        self._invoke(str(name), [], set(), executed)
        return executed

    def _invoke(self, name: str, chain: List[str], done: set, executed: List[str]):
        if name in done:
            return
        if name in chain:
            raise ConfigurationError(f"Circular dependency: {' => '.join(chain + [name])}")

        task = self._tasks.get(name)
        if task is None:
            if os.path.exists(name):
                done.add(name)
                return
            if chain:
                raise FileNotFoundError(f"Don't know how to build {name} (needed by {chain[-1]})")
            raise KeyError(f"No task named {name}")

        for prerequisite in task.prerequisites:
            self._invoke(prerequisite, chain + [name], done, executed)

        if task.needed(self):
            if task.action is not None:
                logging.debug(f"Running {name}")
                task.execute()
                executed.append(name)
        else:
            logging.debug(f"Skipping {name} (up to date)")

        done.add(name)
