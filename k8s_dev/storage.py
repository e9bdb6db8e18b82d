"""Host directories backing the applications' hostPath volumes."""

import os
from pathlib import Path

from k8s_dev.core.cmd_utils import idempotent_by
from k8s_dev.core.config import Settings
from k8s_dev.core.logging import get_logger
from k8s_dev.errors import StorageError

logger = get_logger(__name__)

# Owner and mode of every application directory
STORAGE_UID = 1000
STORAGE_GID = 1000
STORAGE_MODE = 0o755


@idempotent_by(func=lambda path: os.path.isdir(path), skipped=False)
def ensure_directory(path: Path) -> bool:
    """Create ``path`` with the fixed owner and mode. Returns True when created."""
    try:
        os.makedirs(path, exist_ok=True)
        os.chown(path, STORAGE_UID, STORAGE_GID)
        # makedirs mode is filtered by the umask
        os.chmod(path, STORAGE_MODE)
    except OSError as e:
        raise StorageError(f"Could not prepare storage directory {path}: {e}") from e
    logger.info("Created storage directory", path=str(path), success=True)
    return True


def provision_storage(settings: Settings) -> list[Path]:
    """Create missing application directories; returns the ones created."""
    created = [path for path in settings.STORAGE_PATHS if ensure_directory(path)]
    if not created:
        logger.info("Storage directories already present", root=str(settings.STORAGE_ROOT))
    return created
