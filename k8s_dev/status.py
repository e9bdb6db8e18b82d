"""Post-install status table and access summary."""

from typing import Any, Callable

from k8s_dev.core.logging import get_logger
from k8s_dev.kube import ClusterClient
from k8s_dev.models import DeploymentReport, DeploymentUnit

logger = get_logger(__name__)


def _match_names(report: DeploymentReport) -> tuple[str, ...]:
    names = set()
    for unit in report.units:
        names.add(unit.name)
        names.add(unit.resource_name)
    return tuple(sorted(names))


def matching_pods(items: list[dict[str, Any]], report: DeploymentReport) -> list[dict[str, Any]]:
    names = _match_names(report)
    return [
        item
        for item in items
        if item.get("kind") == "Pod" and item.get("metadata", {}).get("name", "").startswith(names)
    ]


def find_service(items: list[dict[str, Any]], unit: DeploymentUnit) -> dict[str, Any] | None:
    for item in items:
        metadata = item.get("metadata", {})
        if item.get("kind") == "Service" and metadata.get("name") == unit.service and metadata.get("namespace") == unit.namespace:
            return item
    return None


def resolve_endpoint(unit: DeploymentUnit, service: dict[str, Any] | None, node_address: str | None) -> str:
    """NodePort or LoadBalancer address when exposed, otherwise the port-forward default."""
    spec = (service or {}).get("spec", {})
    ports = spec.get("ports") or []
    if ports:
        port = ports[0]
        if spec.get("type") == "NodePort" and port.get("nodePort") and node_address:
            return f"http://{node_address}:{port['nodePort']}"
        if spec.get("type") == "LoadBalancer":
            for ingress in (service or {}).get("status", {}).get("loadBalancer", {}).get("ingress") or []:
                address = ingress.get("ip") or ingress.get("hostname")
                if address:
                    return f"http://{address}:{port.get('port')}"
    return f"http://localhost:{unit.default_port}"


def port_forward_hint(unit: DeploymentUnit) -> str:
    target = unit.service_port or unit.default_port
    return f"kubectl port-forward -n {unit.namespace} svc/{unit.service} {unit.default_port}:{target}"


class StatusReporter:
    def __init__(self, client: ClusterClient, echo: Callable[[str], None] = print):
        self.client = client
        self.echo = echo

    def endpoints(self, report: DeploymentReport, items: list[dict[str, Any]]) -> dict[str, str]:
        node_address = self.client.node_address() if report.deployed else None
        return {
            unit.name: resolve_endpoint(unit, find_service(items, unit), node_address)
            for unit in report.deployed
        }

    def print_pods(self, pods: list[dict[str, Any]]) -> None:
        if not pods:
            self.echo("No matching pods found yet")
            return
        self.echo(f"{'NAMESPACE':<16} {'NAME':<48} STATUS")
        for pod in pods:
            metadata = pod.get("metadata", {})
            phase = pod.get("status", {}).get("phase", "Unknown")
            self.echo(f"{metadata.get('namespace', ''):<16} {metadata.get('name', ''):<48} {phase}")

    def report(self, report: DeploymentReport) -> dict[str, str]:
        """Print pod status and the access summary; returns the endpoint per deployed unit."""
        items = self.client.workloads()
        if items is None:
            logger.warning("Could not query pod status")
            items = []

        self.echo("")
        self.print_pods(matching_pods(items, report))

        endpoints = self.endpoints(report, items)
        self.echo("")
        self.echo(f"{'APPLICATION':<18} {'STATUS':<10} ENDPOINT")
        for unit in report.units:
            self.echo(f"{unit.name:<18} {unit.status.value:<10} {endpoints.get(unit.name, '-')}")

        forwarded = [u for u in report.deployed if endpoints[u.name].startswith("http://localhost:")]
        if forwarded:
            self.echo("")
            self.echo("To access services locally, use port-forwarding:")
            for unit in forwarded:
                self.echo(f"  {port_forward_hint(unit)}")

        counts = report.counts()
        self.echo("")
        self.echo(
            f"{counts['deployed']} deployed, {counts['skipped']} skipped, {counts['failed']} failed"
        )
        return endpoints
