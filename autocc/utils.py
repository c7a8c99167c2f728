"""Utility functions for AutoCC."""

import os
import logging
from typing import List
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def read_id_list(path: str) -> List[str]:
    """
    Reads one id per line, skipping blank lines and '#' comments.

    Raises:
        FileNotFoundError: If the file does not exist.
        FileSystemError: If the file cannot be read.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Id list file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = [line.split('#', 1)[0].strip() for line in f]
    except IOError as e:
        raise FileSystemError(f"Could not read id list {path}: {e}") from e
    return [line for line in lines if line]
