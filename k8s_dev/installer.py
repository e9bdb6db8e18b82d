"""
Installer entry point.

Runs pre-flight checks, prepares host storage, deploys every application
in order and prints an access summary:

    sudo k8s-dev-install
    INTERACTIVE=false sudo -E python -m k8s_dev
"""

import sys
import time
from typing import Callable, Optional

from k8s_dev.apps import default_units
from k8s_dev.core.cmd_utils import CommandRunner, run_cmd
from k8s_dev.core.config import Settings
from k8s_dev.core.logging import configure_logging, get_logger
from k8s_dev.errors import InstallerError
from k8s_dev.kube import ClusterClient
from k8s_dev.models import DeploymentReport
from k8s_dev.preflight import run_preflight
from k8s_dev.sequencer import DeploymentSequencer, Prompt, confirm
from k8s_dev.status import StatusReporter
from k8s_dev.storage import provision_storage

logger = get_logger(__name__)

BANNER = "=" * 48


def install(
    settings: Settings,
    runner: Optional[CommandRunner] = None,
    prompt: Optional[Prompt] = None,
    echo: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> DeploymentReport:
    """Run the whole pipeline. Raises InstallerError on fatal pre-flight or storage problems."""
    client = ClusterClient(settings, runner=runner or run_cmd)

    run_preflight(client, settings, sleep=sleep)
    provision_storage(settings)

    mode = "interactive" if settings.INTERACTIVE else "auto-confirm"
    logger.info("Deploying applications", mode=mode)
    report = DeploymentSequencer(client, settings, prompt=prompt or confirm).run(default_units(settings))

    echo("")
    echo(BANNER)
    echo("Deployment Summary")
    echo(BANNER)
    StatusReporter(client, echo=echo).report(report)
    return report


def main(settings: Optional[Settings] = None) -> int:
    if settings is None:
        settings = Settings()
    configure_logging(settings)

    print(BANNER)
    print("k8s-dev Installation Script")
    print(BANNER)

    try:
        install(settings)
    except InstallerError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    logger.info("Installation script completed", success=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
