"""Portainer container management UI."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def portainer(settings: Settings) -> DeploymentUnit:
    return DeploymentUnit(
        name="portainer",
        kind=UnitKind.MANIFEST,
        location=str(settings.MANIFESTS_DIR / "portainer-admin.yaml"),
        namespace="portainer",
        service_port=9000,
        default_port=9000,
    )
