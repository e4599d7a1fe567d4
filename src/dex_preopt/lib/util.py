import os
import sys
from pathlib import Path
from enum import StrEnum


class AnsiColor(StrEnum):
    """
    A collection of ANSI escape codes used by CLI output formatting.
    """

    RED = "\x1b[91m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    LIGHT_YELLOW = "\x1b[93m"
    BLUE = "\x1b[36m"
    DIM = "\x1b[2m"
    RESET = "\x1b[0m"


def print_error(err: str | BaseException):
    """
    Print an error message (or exception) in the console.
    """
    print(f"{AnsiColor.RED}ERROR: {err}{AnsiColor.RESET}", file=sys.stderr)


def print_warning(msg: str):
    print(f"{AnsiColor.YELLOW}WARNING: {msg}{AnsiColor.RESET}", file=sys.stderr)


def is_writable_dir(path: str | Path) -> bool:
    """
    Check that the path is an existing directory the current user can write into.
    """
    return os.path.isdir(path) and os.access(path, os.W_OK)


def is_executable_file(path: str | Path) -> bool:
    """
    Check that the path is a regular file the current user can execute.
    """
    return os.path.isfile(path) and os.access(path, os.X_OK)
