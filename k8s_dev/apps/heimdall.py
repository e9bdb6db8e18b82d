"""Heimdall application dashboard."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def heimdall(settings: Settings) -> DeploymentUnit:
    # data lives in /mnt/apps/heimdall on the node
    return DeploymentUnit(
        name="heimdall",
        kind=UnitKind.MANIFEST,
        location=str(settings.MANIFESTS_DIR / "heimdall-manual.yaml"),
        namespace="heimdall",
        service_port=80,
        default_port=8080,
    )
