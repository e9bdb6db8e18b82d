import os
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from k8s_dev.core.find_root import find_project_root


_CURRENT_ENV = os.getenv("ENV", "dev")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env.common", f".env.{_CURRENT_ENV}"),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    ##### Logging #####
    LOG_LEVEL: str = "INFO"
    LOG_JSON_FORMAT: bool = False
    LOG_COLORS: bool | None = None

    ##### Installer behaviour #####
    INTERACTIVE: bool = True
    REQUIRE_ROOT: bool = True

    ##### Layout #####
    PROJECT_ROOT: Path | None = None

    @computed_field
    @property
    def MANIFESTS_DIR(self) -> Path:
        return (self.PROJECT_ROOT or find_project_root()) / "manifests"

    @computed_field
    @property
    def VALUES_DIR(self) -> Path:
        return (self.PROJECT_ROOT or find_project_root()) / "values"

    ##### Storage #####
    STORAGE_ROOT: Path = Path("/mnt/apps")
    STORAGE_APPS: list[str] = ["portainer", "heimdall", "n8n", "crowdsec", "adguard"]

    @computed_field
    @property
    def STORAGE_PATHS(self) -> list[Path]:
        return [self.STORAGE_ROOT / app for app in self.STORAGE_APPS]

    ##### Cluster clients #####
    KUBECTL: str = "kubectl"
    HELM: str = "helm"
    NODE_READY_POLL_INTERVAL: float = 2.0
    NODE_READY_TIMEOUT: float = 60.0
    HELM_TIMEOUT: str = "5m"


settings = Settings()
