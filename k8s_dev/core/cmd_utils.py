"""Command utilities for k8s_dev."""

import functools
import shutil
import subprocess
from typing import Any, Callable, Sequence

from k8s_dev.core.logging import get_logger

logger = get_logger(__name__)

# Runner signature shared by every module that shells out
CommandRunner = Callable[..., subprocess.CompletedProcess]

# Exit statuses reported when the binary itself cannot be started, as a shell does
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


def run_cmd(args: Sequence[str]) -> subprocess.CompletedProcess:
    """
    Run a command to completion and capture its text output.

    Never raises on a non-zero exit status; callers inspect ``returncode``.
    A missing binary is reported as exit status 127, any other failure to
    start it as 126.

    Args:
        args: Command and arguments, passed without a shell
    """
    args = [str(a) for a in args]
    logger.debug("Running command", command=" ".join(args))
    try:
        return subprocess.run(args, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        return subprocess.CompletedProcess(args=args, returncode=COMMAND_NOT_FOUND, stdout="", stderr=str(e))
    except OSError as e:
        return subprocess.CompletedProcess(args=args, returncode=COMMAND_NOT_EXECUTABLE, stdout="", stderr=str(e))


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def idempotent_by(func: Callable[..., bool], skipped: Any = None) -> Callable:
    """
    Decorator that prevents a function from running when it is already done.

    ``func`` receives the same arguments as the decorated function. When it
    returns True the decorated function is not called and ``skipped`` is
    returned instead.

    Usage:
        @idempotent_by(func=lambda path, **_: os.path.isdir(path), skipped=False)
        def ensure_directory(path, ...):
            # This will only run if the directory is missing
            ...
    """
    if func is None:
        raise ValueError("func must be provided")

    def decorator(wrapped_func: Callable) -> Callable:
        @functools.wraps(wrapped_func)
        def wrapper(*args, **kwargs):
            if func(*args, **kwargs):
                logger.debug("Skipping, already done", step=wrapped_func.__name__)
                return skipped
            return wrapped_func(*args, **kwargs)

        return wrapper

    return decorator
