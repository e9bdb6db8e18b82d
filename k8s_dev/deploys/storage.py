"""Storage provisioning as a pyinfra deploy, for running the installer unprivileged."""

from pyinfra.operations import files

from k8s_dev.core.config import settings
from k8s_dev.storage import STORAGE_GID, STORAGE_MODE, STORAGE_UID


def provision_storage():
    """Create the per-application storage directories on the node."""
    for path in settings.STORAGE_PATHS:
        files.directory(
            name=f"Create storage directory {path}",
            path=str(path),
            user=str(STORAGE_UID),
            group=str(STORAGE_GID),
            mode=f"{STORAGE_MODE:o}",
            present=True,
        )
