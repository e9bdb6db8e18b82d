"""Thin wrappers around the kubectl and helm command-line clients."""

import json
import subprocess
from typing import Any

from k8s_dev.core.cmd_utils import CommandRunner, run_cmd
from k8s_dev.core.config import Settings
from k8s_dev.core.logging import get_logger
from k8s_dev.models import DeploymentUnit, UnitKind

logger = get_logger(__name__)


class ClusterClient:
    """
    Every cluster interaction of the installer goes through this class.

    Only exit statuses and text output of the clients are relied on.
    """

    def __init__(self, settings: Settings, runner: CommandRunner = run_cmd):
        self.settings = settings
        self.runner = runner

    def kubectl(self, *args: str) -> subprocess.CompletedProcess:
        return self.runner([self.settings.KUBECTL, *args])

    def helm(self, *args: str) -> subprocess.CompletedProcess:
        return self.runner([self.settings.HELM, *args])

    def _get_json(self, *args: str) -> dict[str, Any] | None:
        result = self.kubectl("get", *args, "-o", "json")
        if result.returncode != 0:
            logger.debug("kubectl get failed", args=args, stderr=result.stderr.strip())
            return None
        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError:
            logger.warning("kubectl returned malformed JSON", args=args)
            return None

    ##### Cluster #####
    def cluster_reachable(self) -> bool:
        return self.kubectl("cluster-info").returncode == 0

    def nodes_ready(self) -> bool:
        """True when the cluster has at least one node and every node is Ready."""
        nodes = self._get_json("nodes")
        if not nodes or not nodes.get("items"):
            return False
        for node in nodes["items"]:
            conditions = node.get("status", {}).get("conditions", [])
            ready = any(c.get("type") == "Ready" and c.get("status") == "True" for c in conditions)
            if not ready:
                return False
        return True

    def node_address(self) -> str | None:
        """InternalIP of the first node, used to build NodePort URLs."""
        nodes = self._get_json("nodes")
        for node in (nodes or {}).get("items", []):
            for address in node.get("status", {}).get("addresses", []):
                if address.get("type") == "InternalIP":
                    return address.get("address")
        return None

    def workloads(self) -> list[dict[str, Any]] | None:
        """Pods and services across all namespaces, None when the query fails."""
        data = self._get_json("pods,services", "--all-namespaces")
        if data is None:
            return None
        return data.get("items", [])

    ##### Units #####
    def release_status(self, unit: DeploymentUnit) -> str | None:
        """Helm release state (deployed, failed, pending-install, ...), or None when there is no release."""
        result = self.helm("status", unit.name, "-n", unit.namespace, "-o", "json")
        if result.returncode != 0:
            return None
        try:
            return json.loads(result.stdout).get("info", {}).get("status")
        except json.JSONDecodeError:
            logger.warning("helm returned malformed JSON", release=unit.name)
            return None

    def unit_present(self, unit: DeploymentUnit) -> bool:
        if unit.kind == UnitKind.HELM_RELEASE:
            return self.release_status(unit) == "deployed"
        result = self.kubectl("get", unit.lookup_resource, unit.resource_name, "-n", unit.namespace)
        return result.returncode == 0

    def apply_manifest(self, unit: DeploymentUnit) -> subprocess.CompletedProcess:
        return self.kubectl("apply", "-f", unit.location)

    def install_release(self, unit: DeploymentUnit) -> subprocess.CompletedProcess:
        """helm upgrade --install, after making sure the chart repository is known."""
        result = self.helm("repo", "add", "--force-update", unit.repo_name, unit.repo_url)
        if result.returncode != 0:
            return result
        result = self.helm("repo", "update", unit.repo_name)
        if result.returncode != 0:
            return result

        args = [
            "upgrade",
            "--install",
            unit.name,
            unit.location,
            "-n",
            unit.namespace,
            "--create-namespace",
        ]
        if unit.values_file is not None:
            args += ["-f", str(unit.values_file)]
        args += ["--wait", "--timeout", self.settings.HELM_TIMEOUT]
        return self.helm(*args)
