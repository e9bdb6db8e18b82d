"""n8n workflow automation."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def n8n(settings: Settings) -> DeploymentUnit:
    return DeploymentUnit(
        name="n8n",
        kind=UnitKind.MANIFEST,
        location=str(settings.MANIFESTS_DIR / "n8n-deployment.yaml"),
        namespace="n8n",
        service_port=5678,
        default_port=5678,
    )
