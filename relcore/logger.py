"""
Logging setup and management for Relpack.
"""

import datetime
import glob
import logging
import os
from pathlib import Path


def setup_logging(log_folder: str = 'logs', max_log_files: int = 5, verbose: bool = False) -> Path:
    """
    Set up logging configuration.

    Args:
        log_folder: Directory to store log files
        max_log_files: Maximum number of log files to keep
        verbose: Also echo info messages to the console

    Returns:
        Path to the current log file
    """
    logs_folder = Path(log_folder)
    os.makedirs(logs_folder, exist_ok=True)

    # Generate unique log file name
    current_time = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    log_file = logs_folder / f'relpack-{current_time}.log'

    # Clean up old log files (the new one is created below)
    cleanup_old_logs(logs_folder, max_log_files - 1)

    log_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    log_handler = logging.FileHandler(log_file)
    log_handler.setFormatter(log_formatter)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)
    logger.addHandler(log_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    return log_file


def cleanup_old_logs(logs_folder: Path, max_files: int):
    """
    Remove old log files, keeping only the most recent ones.

    Args:
        logs_folder: Directory containing log files
        max_files: Maximum number of log files to keep
    """
    existing_logs = sorted(glob.glob(str(logs_folder / 'relpack-*.log')))
    while len(existing_logs) > max(max_files, 0):
        try:
            os.remove(existing_logs.pop(0))
        except OSError as e:
            logging.warning(f"Could not remove old log file: {e}")


def log_subprocess_error(error, process_name: str):
    """
    Log detailed error information for external tool failures.

    Args:
        error: ExternalToolError exception
        process_name: Name of the process that failed
    """
    logging.error(f"{process_name} failed with return code {error.returncode}")
    logging.error(f"Command: {' '.join(str(c) for c in error.cmd)}")
    if error.stdout:
        logging.error(f"Output:\n{error.stdout}")
    if error.stderr:
        logging.error(f"Errors:\n{error.stderr}")
