"""Node monitoring agent (prometheus node-exporter DaemonSet)."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def monitoring_agent(settings: Settings) -> DeploymentUnit:
    return DeploymentUnit(
        name="monitoring-agent",
        kind=UnitKind.MANIFEST,
        location=str(settings.MANIFESTS_DIR / "monitoring-agent.yaml"),
        namespace="monitoring",
        lookup_resource="daemonset",
        lookup_name="node-exporter",
        service_port=9100,
        default_port=9100,
    )
