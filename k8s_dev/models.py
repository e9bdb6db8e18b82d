from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class UnitKind(str, Enum):
    MANIFEST = "manifest"
    HELM_RELEASE = "helm-release"


class UnitStatus(str, Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    DEPLOYED = "deployed"
    FAILED = "failed"


class DeploymentUnit(BaseModel):
    """One manifest file/directory or one Helm release, deployed as a whole."""

    name: str
    kind: UnitKind
    # manifest path, or chart reference for helm releases
    location: str
    namespace: str = "default"

    # presence check for manifest units: kubectl get <lookup_resource> <lookup_name>
    lookup_resource: str = "deployment"
    lookup_name: str | None = None

    # helm only
    repo_name: str | None = None
    repo_url: str | None = None
    values_file: Path | None = None

    # access summary
    service_name: str | None = None
    service_port: int | None = None
    default_port: int

    prompt_default: bool = True
    status: UnitStatus = Field(default=UnitStatus.PENDING)

    @model_validator(mode="after")
    def validate_kind(self):
        if self.kind == UnitKind.HELM_RELEASE and not (self.repo_name and self.repo_url):
            raise ValueError(f"Helm release {self.name} needs repo_name and repo_url")
        if self.kind == UnitKind.MANIFEST and self.values_file is not None:
            raise ValueError(f"Manifest unit {self.name} cannot take a values file")
        return self

    @property
    def resource_name(self) -> str:
        return self.lookup_name or self.name

    @property
    def service(self) -> str:
        return self.service_name or self.resource_name

    def mark(self, status: UnitStatus) -> None:
        if status == UnitStatus.PENDING:
            raise ValueError("A unit cannot be moved back to pending")
        if self.status != UnitStatus.PENDING:
            raise ValueError(f"{self.name} already finished as {self.status.value}")
        self.status = status


class DeploymentReport(BaseModel):
    """Per-unit outcome of one installer run, in declaration order."""

    units: list[DeploymentUnit] = Field(default_factory=list)

    def _with_status(self, status: UnitStatus) -> list[DeploymentUnit]:
        return [u for u in self.units if u.status == status]

    @property
    def deployed(self) -> list[DeploymentUnit]:
        return self._with_status(UnitStatus.DEPLOYED)

    @property
    def skipped(self) -> list[DeploymentUnit]:
        return self._with_status(UnitStatus.SKIPPED)

    @property
    def failed(self) -> list[DeploymentUnit]:
        return self._with_status(UnitStatus.FAILED)

    def counts(self) -> dict[str, int]:
        return {status.value: len(self._with_status(status)) for status in UnitStatus}
