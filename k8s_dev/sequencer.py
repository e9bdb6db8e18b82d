"""Applies the deployment units one after another."""

from pathlib import Path
from typing import Callable, Iterable

import click

from k8s_dev.core.cmd_utils import idempotent_by
from k8s_dev.core.config import Settings
from k8s_dev.core.logging import get_logger
from k8s_dev.kube import ClusterClient
from k8s_dev.models import DeploymentReport, DeploymentUnit, UnitKind, UnitStatus

logger = get_logger(__name__)

Prompt = Callable[[str, bool], bool]


def confirm(question: str, default: bool = True) -> bool:
    """Ask a yes/no question on the terminal. Empty input or EOF picks the default."""
    try:
        return click.confirm(question, default=default)
    except click.Abort as e:
        # click raises Abort for both EOF and Ctrl-C
        if isinstance(e.__context__, KeyboardInterrupt):
            raise KeyboardInterrupt from e
        click.echo()
        return default


class DeploymentSequencer:
    def __init__(self, client: ClusterClient, settings: Settings, prompt: Prompt = confirm):
        self.client = client
        self.settings = settings
        self.prompt = prompt

    def run(self, units: Iterable[DeploymentUnit]) -> DeploymentReport:
        report = DeploymentReport()
        for unit in units:
            unit.mark(self.deploy_unit(unit))
            report.units.append(unit)
        return report

    def deploy_unit(self, unit: DeploymentUnit) -> UnitStatus:
        log = logger.bind(unit=unit.name)
        if self.settings.INTERACTIVE and not self.prompt(f"Deploy {unit.name}?", unit.prompt_default):
            log.info("Skipped by user")
            return UnitStatus.SKIPPED
        return self._apply(unit)

    def _already_present(self, unit: DeploymentUnit) -> bool:
        present = self.client.unit_present(unit)
        if present:
            logger.info("Already deployed, skipping", unit=unit.name, namespace=unit.namespace)
        return present

    @idempotent_by(func=lambda self, unit: self._already_present(unit), skipped=UnitStatus.DEPLOYED)
    def _apply(self, unit: DeploymentUnit) -> UnitStatus:
        log = logger.bind(unit=unit.name, kind=unit.kind.value)
        log.info("Deploying", location=unit.location)

        if unit.kind == UnitKind.MANIFEST:
            if not Path(unit.location).exists():
                log.error("Manifest not found", location=unit.location)
                return UnitStatus.FAILED
            result = self.client.apply_manifest(unit)
        else:
            result = self.client.install_release(unit)

        if result.returncode != 0:
            log.error("Deployment failed", returncode=result.returncode, stderr=(result.stderr or "").strip())
            return UnitStatus.FAILED
        log.info("Deployed successfully", success=True)
        return UnitStatus.DEPLOYED
