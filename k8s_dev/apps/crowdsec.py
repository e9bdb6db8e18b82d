"""CrowdSec security engine, installed from its Helm chart."""

from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit, UnitKind


def crowdsec(settings: Settings) -> DeploymentUnit:
    return DeploymentUnit(
        name="crowdsec",
        kind=UnitKind.HELM_RELEASE,
        location="crowdsec/crowdsec",
        namespace="crowdsec",
        repo_name="crowdsec",
        repo_url="https://crowdsecurity.github.io/helm-charts",
        values_file=settings.VALUES_DIR / "crowdsec-values.yaml",
        # local API
        service_name="crowdsec-service",
        service_port=8080,
        default_port=8082,
        prompt_default=False,
    )
