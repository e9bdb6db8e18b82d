"""Environment checks run before anything is changed."""

import os
import time
from typing import Callable

from k8s_dev.core.cmd_utils import command_exists
from k8s_dev.core.config import Settings
from k8s_dev.core.logging import get_logger
from k8s_dev.errors import PreflightError
from k8s_dev.kube import ClusterClient

logger = get_logger(__name__)


def check_privileges(settings: Settings) -> None:
    if not settings.REQUIRE_ROOT:
        logger.warning("Root check disabled, storage directories must already exist with the right owner")
        return
    if os.geteuid() != 0:
        raise PreflightError(
            "This installer must run as root (try sudo). To keep it unprivileged, provision storage with "
            "'sudo pyinfra @local deploy.provision_storage' and set REQUIRE_ROOT=false"
        )


def check_tools(settings: Settings) -> None:
    for tool in (settings.KUBECTL, settings.HELM):
        if not command_exists(tool):
            raise PreflightError(f"{tool} is not installed or not in PATH")
    logger.info("Cluster clients found", kubectl=settings.KUBECTL, helm=settings.HELM)


def check_cluster(client: ClusterClient) -> None:
    if not client.cluster_reachable():
        raise PreflightError("Cannot connect to Kubernetes cluster")
    logger.info("Connected to Kubernetes cluster", success=True)


def wait_for_nodes(
    client: ClusterClient,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """
    Poll until every node is Ready.

    Returns False on timeout. Never raises, the run goes on with a warning.
    """
    deadline = clock() + settings.NODE_READY_TIMEOUT
    while True:
        if client.nodes_ready():
            logger.info("All nodes are Ready", success=True)
            return True
        if clock() >= deadline:
            logger.warning(
                "Nodes not Ready after timeout, continuing anyway",
                timeout=settings.NODE_READY_TIMEOUT,
            )
            return False
        logger.debug("Waiting for nodes to become Ready", interval=settings.NODE_READY_POLL_INTERVAL)
        sleep(settings.NODE_READY_POLL_INTERVAL)


def check_storage(settings: Settings) -> None:
    root = settings.STORAGE_ROOT
    if not root.is_dir():
        raise PreflightError(f"Storage mount point {root} does not exist, mount it before installing")
    if not os.access(root, os.W_OK):
        raise PreflightError(f"Storage mount point {root} is not writable")


def check_layout(settings: Settings) -> None:
    try:
        manifests_dir, values_dir = settings.MANIFESTS_DIR, settings.VALUES_DIR
    except FileNotFoundError as e:
        raise PreflightError(f"Manifests directory not found: {e}") from e
    if not manifests_dir.is_dir():
        raise PreflightError(f"Manifests directory not found: {manifests_dir}")
    if not values_dir.is_dir():
        logger.warning("Values directory not found, helm releases will fail", path=str(values_dir))


def run_preflight(client: ClusterClient, settings: Settings, sleep: Callable[[float], None] = time.sleep) -> None:
    """Run every check in order; the first fatal one raises PreflightError."""
    check_privileges(settings)
    check_tools(settings)
    check_cluster(client)
    wait_for_nodes(client, settings, sleep=sleep)
    check_storage(settings)
    check_layout(settings)
