"""Static web demo, applied as a whole directory of manifests."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def web_demo(settings: Settings) -> DeploymentUnit:
    return DeploymentUnit(
        name="web-demo",
        kind=UnitKind.MANIFEST,
        location=str(settings.MANIFESTS_DIR / "web-demo"),
        namespace="web-demo",
        service_port=80,
        default_port=8081,
    )
