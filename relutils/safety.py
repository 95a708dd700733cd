"""
Safe execution of external tools for Relpack.
Compressors and the interpreter-wrapping tool run through here.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


class ExternalToolError(Exception):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, operation: str, cmd: List[str], returncode: int,
                 stdout: str = "", stderr: str = ""):
        self.operation = operation
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"{operation} failed with exit code {returncode}")



class SubprocessSafety:
    """Subprocess execution with captured output."""

    @staticmethod
    def run_tool(cmd: list, cwd: Optional[Path] = None, operation: str = "Subprocess") -> tuple:
        """
        Run a subprocess to completion and capture its output.

        Args:
            cmd: Command and arguments
            cwd: Working directory
            operation: Operation description for logging

        Returns:
            Tuple of (success: bool, stdout: str, stderr: str, returncode: int)

        Raises:
            FileNotFoundError: If the tool is not installed
        """
        logging.debug(f"[TOOL] Starting {operation}: {' '.join(str(c) for c in cmd)}")

        process = subprocess.Popen(
            [str(c) for c in cmd],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            text=True,
            encoding='utf-8',
            errors='replace'
        )
        stdout, stderr = process.communicate()

        success = process.returncode == 0
        if not success:
            logging.warning(f"[TOOL] {operation} failed with code {process.returncode}")

        return success, stdout, stderr, process.returncode

    @staticmethod
    def run_checked(cmd: list, cwd: Optional[Path] = None, operation: str = "Subprocess") -> str:
        """
        Run a tool and raise ExternalToolError unless it succeeds.

        A tool that cannot be found is reported with the shell's exit code 127.

        Returns:
            Captured stdout
        """
        try:
            success, stdout, stderr, code = SubprocessSafety.run_tool(
                cmd, cwd=cwd, operation=operation)
        except FileNotFoundError as e:
            logging.error(f"[TOOL] {operation}: {cmd[0]} not found")
            raise ExternalToolError(operation, list(cmd), 127, "", str(e)) from e

        if stdout:
            logging.debug(f"[TOOL] {operation} output:\n{stdout}")

        if not success:
            raise ExternalToolError(operation, list(cmd), code, stdout, stderr)

        return stdout
