"""
External tool validation for Relpack.
Checks availability of the compressors and wrapping tools a project needs.
"""

import shutil
import sys
from typing import Dict, List

from colorama import Fore, Style


class SystemCheck:
    """Validates the external tools required by a project."""

    TOOLS = {
        '7z': {
            'name': '7-Zip',
            'command': ['7z'],
            'purpose': '7z and zip archives'
        },
        'tar': {
            'name': 'tar',
            'command': ['tar'],
            'purpose': 'tar.bz2 archives'
        },
        'pyinstaller': {
            'name': 'PyInstaller',
            'command': [sys.executable, '-m', 'PyInstaller'],
            'purpose': 'win32 folder, standalone and installer outputs'
        },
        'iscc': {
            'name': 'Inno Setup',
            'command': ['iscc'],
            'purpose': 'win32 installer output'
        },
    }

    def __init__(self, config=None):
        """Initialize SystemCheck with optional config containing tool overrides."""
        self.config = config or {}

    def get_tool_command(self, tool_key: str) -> List[str]:
        """
        Get the command to run for a specific tool.

        Args:
            tool_key: Key from TOOLS dict

        Returns:
            List of command parts to execute
        """
        tool_info = self.TOOLS.get(tool_key)
        if not tool_info:
            return []

        custom = self.config.get('tools', {}).get(tool_key)
        if isinstance(custom, str):
            return [custom]
        if isinstance(custom, list) and custom:
            return list(custom)

        return list(tool_info['command'])

    def check_tool(self, tool_key: str) -> bool:
        """
        Check if a specific tool can be found.

        Args:
            tool_key: Key from TOOLS dict

        Returns:
            True if tool is available, False otherwise
        """
        command = self.get_tool_command(tool_key)
        if not command:
            return False

        if command[0] == sys.executable and command[1:2] == ['-m']:
            # Python module tools are looked up on the running interpreter
            import importlib.util
            return importlib.util.find_spec(command[2]) is not None

        return shutil.which(command[0]) is not None

    def required_tools(self, project) -> List[str]:
        """Tools needed for the outputs and archives a project requests."""
        required = []
        if '7z' in project.archives or 'zip' in project.archives:
            required.append('7z')
        if 'tar_bz2' in project.archives:
            required.append('tar')
        if any(o in project.outputs for o in ('win32_folder', 'win32_standalone', 'win32_installer')):
            required.append('pyinstaller')
        if 'win32_installer' in project.outputs:
            required.append('iscc')
        return required

    def check_all_tools(self, project=None) -> Dict[str, bool]:
        """
        Check tools, restricted to those a project needs when one is given.

        Returns:
            Dictionary mapping tool keys to availability status
        """
        keys = self.required_tools(project) if project is not None else list(self.TOOLS)
        return {key: self.check_tool(key) for key in keys}

    def display_tool_status(self, tools_status: Dict[str, bool]) -> bool:
        """
        Display status of all tools and check if we can proceed.

        Args:
            tools_status: Dictionary from check_all_tools()

        Returns:
            True if every checked tool is available
        """
        can_proceed = True
        status_parts = []

        for tool_key, is_available in tools_status.items():
            tool_info = self.TOOLS[tool_key]

            if is_available:
                status_parts.append(f"{Fore.GREEN}{tool_info['name']}: OK{Style.RESET_ALL}")
            else:
                status_parts.append(f"{Fore.RED}{tool_info['name']}: MISSING{Style.RESET_ALL}")
                can_proceed = False

        print(" | ".join(status_parts) if status_parts else "No external tools needed")

        if not can_proceed:
            print(Fore.RED + "ERROR: Required tools missing! Cannot continue." + Style.RESET_ALL)
            print(f"{Fore.YELLOW}TIP: Set tool paths in the 'tools' section of release.json{Style.RESET_ALL}")

        return can_proceed
