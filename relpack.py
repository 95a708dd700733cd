"""
Relpack: release packaging for Python projects

Builds platform-specific release folders (source tree, macOS app, Windows
folders, installers and executables) from a release.json project
description, then compresses each one into the requested archive formats.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from colorama import init, Fore, Style

from relcore import Config, compile_tasks, setup_logging
from relcore.config import DEFAULT_CONFIG_FILE
from relcore.logger import log_subprocess_error
from relutils.defensive import ConfigurationError
from relutils.error_messages import format_config_error, format_filesystem_error, format_tool_error
from relutils.safety import ExternalToolError
from relutils.system_check import SystemCheck

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_EXTERNAL_TOOL = 3
EXIT_FILESYSTEM = 4
EXIT_INTERRUPTED = 130


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='relpack',
        description='Build and package release folders from a project description.'
    )
    parser.add_argument('tasks', nargs='*', default=['package'],
                        help='Tasks to run (default: package)')
    parser.add_argument('-c', '--config', default=DEFAULT_CONFIG_FILE,
                        help=f'Project description (default: {DEFAULT_CONFIG_FILE})')
    parser.add_argument('-l', '--list', action='store_true',
                        help='List the available tasks and exit')
    parser.add_argument('--check-tools', action='store_true',
                        help='Check the external tools the project needs and exit')
    parser.add_argument('--log-folder', help='Directory for log files')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Echo progress messages to the console')
    return parser.parse_args(argv)


def list_tasks(graph):
    width = max(len(name) for name, _ in graph.described())
    for name, description in graph.described():
        print(f"relpack {Fore.CYAN}{name:<{width}}{Style.RESET_ALL}  # {description}")


def run(args) -> int:
    config_path = Path(args.config)
    if not config_path.exists():
        print(Fore.RED + format_config_error("Project description not found", config_path) + Style.RESET_ALL)
        return EXIT_CONFIGURATION

    # Paths in the project description are relative to it
    project_root = config_path.resolve().parent
    os.chdir(project_root)

    try:
        config = Config(Path(config_path.name))
    except ConfigurationError as e:
        print(Fore.RED + format_config_error(str(e), config_path) + Style.RESET_ALL)
        return EXIT_CONFIGURATION

    log_file = setup_logging(args.log_folder or config.log_folder, config.max_log_files, args.verbose)
    logging.info("=" * 70)
    logging.info("Relpack started")
    logging.info(f"Log file: {log_file}")

    try:
        project = config.to_project()
        graph = compile_tasks(project)
    except ConfigurationError as e:
        print(Fore.RED + format_config_error(str(e), config_path) + Style.RESET_ALL)
        logging.error(f"Configuration error: {e}")
        return EXIT_CONFIGURATION

    if args.list:
        list_tasks(graph)
        return EXIT_OK

    if args.check_tools:
        system_check = SystemCheck(config)
        print("[TOOLS] Checking requirements...", end=" ")
        ok = system_check.display_tool_status(system_check.check_all_tools(project))
        return EXIT_OK if ok else EXIT_CONFIGURATION

    unknown = [name for name in args.tasks if name not in graph]
    if unknown:
        print(Fore.RED + f"Unknown task(s): {', '.join(unknown)}. Use --list to see tasks." + Style.RESET_ALL)
        return EXIT_CONFIGURATION

    try:
        for name in args.tasks:
            print(f"[TASK] {Fore.CYAN}{name}{Style.RESET_ALL}")
            executed = graph.invoke(name)
            for step in executed:
                logging.info(f"Ran {step}")
            if not executed:
                print(f"  {Style.DIM}up to date{Style.RESET_ALL}")
    except ConfigurationError as e:
        print(Fore.RED + format_config_error(str(e), config_path) + Style.RESET_ALL)
        logging.error(f"Configuration error: {e}")
        return EXIT_CONFIGURATION
    except ExternalToolError as e:
        print(Fore.RED + format_tool_error(e.operation, e.returncode, e.stderr) + Style.RESET_ALL)
        log_subprocess_error(e, e.operation)
        return EXIT_EXTERNAL_TOOL
    except OSError as e:
        print(Fore.RED + format_filesystem_error(e) + Style.RESET_ALL)
        logging.error(f"Filesystem error: {e}", exc_info=True)
        return EXIT_FILESYSTEM

    print(f"{Fore.GREEN}[COMPLETE]{Style.RESET_ALL} {', '.join(args.tasks)}")
    logging.info("Relpack completed successfully")
    return EXIT_OK


def main(argv=None):
    """Main entry point."""
    init()
    args = parse_args(argv)

    try:
        code = run(args)
    except KeyboardInterrupt:
        print(Fore.YELLOW + "\n\nOperation interrupted by user" + Style.RESET_ALL)
        logging.info("User interrupted operation")
        code = EXIT_INTERRUPTED
    except Exception as e:
        print(Fore.RED + f"\nUnexpected error: {e}" + Style.RESET_ALL)
        logging.error(f"Unexpected error: {e}", exc_info=True)
        code = EXIT_UNEXPECTED

    sys.exit(code)


if __name__ == '__main__':
    main()
