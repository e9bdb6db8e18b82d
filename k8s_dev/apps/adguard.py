"""AdGuard Home DNS filter."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def adguard(settings: Settings) -> DeploymentUnit:
    return DeploymentUnit(
        name="adguard",
        kind=UnitKind.MANIFEST,
        location=str(settings.MANIFESTS_DIR / "adguard-home.yaml"),
        namespace="adguard",
        service_port=3000,
        default_port=3000,
        prompt_default=False,
    )
