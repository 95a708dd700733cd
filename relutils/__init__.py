"""
Relpack Utilities
Error types, validation, tool execution and tool checks.
"""

from .defensive import ConfigurationError, ValidationError
from .safety import ExternalToolError, SubprocessSafety
from .system_check import SystemCheck

__all__ = [
    'ConfigurationError',
    'ValidationError',
    'ExternalToolError',
    'SubprocessSafety',
    'SystemCheck'
]
