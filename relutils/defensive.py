"""
Defensive programming utilities for Relpack.
Configuration errors, input validation and state verification.
"""

import logging
from pathlib import Path

import psutil


class ValidationError(Exception):
    """Raised when validation fails."""
    pass


class ConfigurationError(ValidationError):
    """Raised when the project description cannot produce the requested outputs."""
    pass


class InputValidator:
    """Validates inputs coming from project descriptions."""

    @staticmethod
    def validate_relative(path: str, field: str) -> str:
        """Reject absolute paths and parent references in manifest entries."""
        path_obj = Path(path)
        if path_obj.is_absolute() or '..' in path_obj.parts:
            raise ConfigurationError(
                f"{field} must be a path relative to the project root: {path}")
        return path


class StateValidator:
    """Validates system state before writing outputs."""

    @staticmethod
    def check_disk_space(path: Path, required_mb: int = 100) -> bool:
        """
        Check if sufficient disk space is available.

        Args:
            path: Path to check (the nearest existing parent is used)
            required_mb: Required space in MB

        Returns:
            True if sufficient space, False otherwise
        """
        probe = Path(path)
        while not probe.exists() and probe != probe.parent:
            probe = probe.parent

        try:
            free_mb = psutil.disk_usage(str(probe)).free / (1024 * 1024)
        except OSError as e:
            logging.error(f"Cannot check disk space: {e}")
            return True  # Assume OK if can't check

        if free_mb < required_mb:
            logging.warning(f"Low disk space: {free_mb:.1f}MB free, {required_mb}MB required")
            return False

        return True

    @staticmethod
    def estimate_size_mb(paths) -> int:
        """Total size of the given files and folders, rounded up to a whole MB."""
        total = 0
        for path in paths:
            path = Path(path)
            if path.is_dir():
                total += sum(f.stat().st_size for f in path.rglob('*') if f.is_file())
            elif path.is_file():
                total += path.stat().st_size
        return int(total / (1024 * 1024)) + 1
