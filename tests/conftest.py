"""
Pytest configuration and fixtures for Relpack tests.
"""

import pytest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from relcore.project import Project

SOURCE_FILES = [
    "bin/test_app",
    "lib/test_app/__init__.py",
    "lib/test_app/main.py",
    "README.txt",
    "LICENSE.txt",
]


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """A small project on disk; the working directory is its root."""
    root = tmp_path / "test_app"
    for name in SOURCE_FILES:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"contents of {name}\n")
    (root / "bin" / "test_app").write_text("print('test run!')\n")
    (root / "test_app.ico").write_bytes(b"\x00\x00\x01\x00icon")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def new_project(project_dir):
    """Project named test_app 0.1 covering the fixture files."""
    project = Project("Test App", "0.1")
    project.files = list(SOURCE_FILES)
    project.readme = "README.txt"
    project.license = "LICENSE.txt"
    return project


@pytest.fixture
def wrapper_dir(tmp_path):
    """A minimal wrapper runtime tree."""
    wrapper = tmp_path / "wrapper"
    (wrapper / "bin").mkdir(parents=True)
    (wrapper / "console.exe").write_bytes(b"MZ console stub")
    (wrapper / "windows.exe").write_bytes(b"MZ windows stub")
    (wrapper / "bin" / "python.exe").write_bytes(b"MZ python")
    (wrapper / "bin" / "pythonw.exe").write_bytes(b"MZ pythonw")
    for i in range(6):
        (wrapper / "bin" / f"lib{i}.dll").write_bytes(b"dll")
    (wrapper / "Lib").mkdir()
    (wrapper / "Lib" / "os.py").write_text("# stdlib\n")
    return wrapper
