"""
Clear, actionable error message formatting.

All error messages follow the pattern:
  ERROR: [What failed]
    Reason: [Why it failed]
    Action: [What user should do]
    Location: [Where the problem is]
"""

from pathlib import Path
from typing import Optional


def format_error(
    what_failed: str,
    reason: str,
    action: str,
    location: Optional[Path] = None,
    details: Optional[str] = None
) -> str:
    """
    Format a clear, actionable error message.

    Args:
        what_failed: What operation failed (e.g., "Failed to build win32 folder")
        reason: Why it failed (e.g., "wrapper not set")
        action: What user should do (e.g., "Set 'wrapper' in release.json")
        location: Where the problem occurred (file path, directory, etc.)
        details: Optional additional details

    Returns:
        Formatted error message
    """
    lines = [f"ERROR: {what_failed}"]
    lines.append(f"  Reason: {reason}")
    lines.append(f"  Action: {action}")

    if location:
        lines.append(f"  Location: {location}")

    if details:
        lines.append(f"  Details: {details}")

    return "\n".join(lines)


def format_config_error(reason: str, config_file: Optional[Path] = None) -> str:
    """Format a project configuration error."""
    return format_error(
        what_failed="Invalid project configuration",
        reason=reason,
        action="Fix the project description and run again",
        location=config_file
    )


def format_tool_error(operation: str, returncode: int, stderr: Optional[str] = None) -> str:
    """Format an external tool failure."""
    details = None
    if stderr:
        # Truncate stderr if too long
        details = stderr[:500] + "..." if len(stderr) > 500 else stderr

    return format_error(
        what_failed=operation,
        reason=f"Tool exited with code {returncode}",
        action="Check that the tool is installed and the inputs are readable",
        details=details
    )


def format_filesystem_error(error: OSError) -> str:
    """Format a filesystem error raised while assembling or packaging."""
    return format_error(
        what_failed="Filesystem operation failed",
        reason=error.strerror or str(error),
        action="Check permissions and free space, then run the step again",
        location=error.filename
    )
