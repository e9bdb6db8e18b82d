"""
Catalogue of the applications the installer knows about.

Each application is described in its own module; ``default_units``
returns them in the order they are deployed.
"""

from k8s_dev.apps.adguard import adguard
from k8s_dev.apps.crowdsec import crowdsec
from k8s_dev.apps.heimdall import heimdall
from k8s_dev.apps.monitoring import monitoring_agent
from k8s_dev.apps.n8n import n8n
from k8s_dev.apps.portainer import portainer
from k8s_dev.apps.web_demo import web_demo
from k8s_dev.core.config import Settings
from k8s_dev.models import DeploymentUnit

__all__ = [
    "portainer",
    "heimdall",
    "n8n",
    "web_demo",
    "monitoring_agent",
    "crowdsec",
    "adguard",
    "default_units",
]

DEPLOY_ORDER = [portainer, heimdall, n8n, web_demo, monitoring_agent, crowdsec, adguard]


def default_units(settings: Settings) -> list[DeploymentUnit]:
    """Fresh, pending units in deployment order."""
    return [build(settings) for build in DEPLOY_ORDER]
